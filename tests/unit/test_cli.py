"""Unit tests for the sitebot CLI commands."""

from unittest.mock import MagicMock, patch

from typer.testing import CliRunner

from config.settings import Settings
from sitebot.cli.main import app
from sitebot.ingestion.pipeline import IngestionResult
from sitebot.models.citation import Answer, Source
from sitebot.models.index import SiteIndex

runner = CliRunner()


def _settings(tmp_path, **overrides):
    values = {
        "sitebot_site": "https://www.example.com",
        "sitebot_embedding_provider": "sentence-transformers",
        "sitebot_llm_provider": "anthropic",
        "anthropic_api_key": "sk-ant-test",
        "sitebot_index_path": str(tmp_path / "index.json"),
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class TestIngestCommand:

    @patch("sitebot.cli.ingest.run_ingestion_pipeline")
    @patch("sitebot.cli.ingest.get_settings")
    def test_prints_summary(self, mock_settings, mock_pipeline, tmp_path):
        mock_settings.return_value = _settings(tmp_path)
        mock_pipeline.return_value = IngestionResult(
            index=SiteIndex(site="https://www.example.com", model="m"),
            urls_discovered=4,
            pages_ingested=3,
            pages_skipped=1,
            index_path=tmp_path / "index.json",
        )

        result = runner.invoke(app, ["ingest", "--limit", "4", "--chunk-size", "800"])

        assert result.exit_code == 0, result.output
        assert "Ingestion complete" in result.output
        assert "Pages ingested: 3" in result.output
        kwargs = mock_pipeline.call_args.kwargs
        assert kwargs["site"] == "https://www.example.com"
        assert kwargs["limit"] == 4
        assert kwargs["chunk_size"] == 800

    @patch("sitebot.cli.ingest.run_ingestion_pipeline")
    @patch("sitebot.cli.ingest.get_settings")
    def test_missing_key_exits_before_crawling(self, mock_settings, mock_pipeline, tmp_path):
        mock_settings.return_value = _settings(tmp_path, sitebot_embedding_provider="openai", openai_api_key="")

        result = runner.invoke(app, ["ingest"])

        assert result.exit_code == 1
        assert "OPENAI_API_KEY" in result.output
        mock_pipeline.assert_not_called()

    @patch("sitebot.cli.ingest.run_ingestion_pipeline")
    @patch("sitebot.cli.ingest.get_settings")
    def test_invalid_chunk_settings_exit_before_crawling(self, mock_settings, mock_pipeline, tmp_path):
        mock_settings.return_value = _settings(tmp_path)

        result = runner.invoke(app, ["ingest", "--chunk-size", "100", "--chunk-overlap", "150"])

        assert result.exit_code == 2
        assert "Invalid chunk settings" in result.output
        mock_pipeline.assert_not_called()


class TestAskCommand:

    @patch("sitebot.cli.ask.AnswerComposer")
    @patch("sitebot.cli.ask.get_embedding_provider")
    @patch("sitebot.cli.ask.get_settings")
    def test_prints_reply_and_sources(self, mock_settings, mock_provider, mock_composer, tmp_path):
        mock_settings.return_value = _settings(tmp_path)
        mock_composer.return_value.answer.return_value = Answer(
            reply="Plans start at $10.",
            sources=[Source(title="Pricing", url="https://www.example.com/pricing")],
        )

        result = runner.invoke(app, ["ask", "How much?"])

        assert result.exit_code == 0, result.output
        assert "Plans start at $10." in result.output
        assert "https://www.example.com/pricing" in result.output
        assert "No indexed content" in result.output
        mock_composer.return_value.answer.assert_called_once_with("How much?")

    @patch("sitebot.cli.ask.AnswerComposer")
    @patch("sitebot.cli.ask.get_embedding_provider")
    @patch("sitebot.cli.ask.get_settings")
    def test_invalid_question_exits_2(self, mock_settings, mock_provider, mock_composer, tmp_path):
        mock_settings.return_value = _settings(tmp_path)

        result = runner.invoke(app, ["ask", "   "])

        assert result.exit_code == 2
        assert "Invalid question" in result.output
        mock_composer.assert_not_called()
        mock_provider.assert_not_called()

    @patch("sitebot.cli.ask.AnswerComposer")
    @patch("sitebot.cli.ask.get_embedding_provider")
    @patch("sitebot.cli.ask.get_settings")
    def test_upstream_value_error_is_not_a_question_error(self, mock_settings, mock_provider, mock_composer, tmp_path):
        mock_settings.return_value = _settings(tmp_path)
        mock_composer.return_value.answer.side_effect = ValueError("query embedding has dimension 3, index has 2")

        result = runner.invoke(app, ["ask", "How much?"])

        assert result.exit_code == 1
        assert "Invalid question" not in result.output
        assert "Could not answer the question" in result.output

    @patch("sitebot.cli.ask.AnswerComposer")
    @patch("sitebot.cli.ask.get_embedding_provider")
    @patch("sitebot.cli.ask.get_settings")
    def test_completion_failure_exits_1(self, mock_settings, mock_provider, mock_composer, tmp_path):
        mock_settings.return_value = _settings(tmp_path)
        mock_composer.return_value.answer.side_effect = RuntimeError("upstream 503")

        result = runner.invoke(app, ["ask", "How much?"])

        assert result.exit_code == 1
        assert "Could not answer the question" in result.output
        assert not isinstance(result.exception, RuntimeError)

    @patch("sitebot.cli.ask.AnswerComposer")
    @patch("sitebot.cli.ask.get_embedding_provider")
    @patch("sitebot.cli.ask.get_settings")
    def test_unsupported_embedding_provider_exits_1(self, mock_settings, mock_provider, mock_composer, tmp_path):
        mock_settings.return_value = _settings(tmp_path)
        mock_provider.side_effect = ValueError("Unsupported embedding provider: word2vec")

        result = runner.invoke(app, ["ask", "How much?"])

        assert result.exit_code == 1
        assert "Invalid question" not in result.output

    @patch("sitebot.cli.ask.AnswerComposer", new_callable=MagicMock)
    @patch("sitebot.cli.ask.get_settings")
    def test_missing_llm_key_exits_1(self, mock_settings, mock_composer, tmp_path):
        mock_settings.return_value = _settings(tmp_path, anthropic_api_key="")

        result = runner.invoke(app, ["ask", "Hello?"])

        assert result.exit_code == 1
        assert "ANTHROPIC_API_KEY" in result.output
        mock_composer.assert_not_called()

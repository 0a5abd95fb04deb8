import asyncio
import logging

from sitebot.mcp_server.server import main

logging.basicConfig(level=logging.INFO)
asyncio.run(main())

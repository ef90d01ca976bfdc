import asyncio
import sys

from backend.app.core.config import get_settings
from backend.app.core.logging import setup_logging
from backend.app.db.session import Database


async def init_models(reset: bool = False):
    settings = get_settings()
    db = Database(settings)
    try:
        if reset:
            # DEV MODE ONLY: drops every message and user
            await db.drop_all()
        await db.create_all()
    finally:
        await db.dispose()
    print(">>> Tables Created Successfully!")


if __name__ == "__main__":
    setup_logging(get_settings().LOG_LEVEL)
    asyncio.run(init_models(reset="--reset" in sys.argv))

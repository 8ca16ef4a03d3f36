"""
Terminal dashboard — mounts the client shell once and prints every panel.

Usage:
    python scripts/run_dashboard.py [CITY] [AMOUNT_INR]

Talks to the backend at INFOHUB_API_URL (default http://localhost:3001).
"""

import asyncio
import sys

from app.client.api import InfoHubClient
from app.client.shell import ClientShell, Tab
from app.config import settings
from app.core.logging import configure_logging

STATUS_WAIT_SECONDS = 3.0


async def main(argv: list[str]):
    """Mount the shell, run the requested lookups, print each tab, unmount."""
    city = argv[0] if len(argv) > 0 else None
    amount = argv[1] if len(argv) > 1 else None

    async with InfoHubClient(settings.INFOHUB_API_URL) as api:
        shell = ClientShell(api, poll_interval=settings.POLL_INTERVAL_SECONDS)
        await shell.mount()

        loop = asyncio.get_running_loop()
        deadline = loop.time() + STATUS_WAIT_SECONDS
        while shell.backend_healthy is None and loop.time() < deadline:
            await asyncio.sleep(0.05)

        if city is not None:
            await shell.widgets[Tab.WEATHER].fetch(city)
        await shell.widgets[Tab.CURRENCY].convert(amount)

        for tab in Tab:
            print(shell.render(tab))
            print("\n" + "=" * 40 + "\n")

        await shell.unmount()


if __name__ == "__main__":
    configure_logging(settings)
    asyncio.run(main(sys.argv[1:]))

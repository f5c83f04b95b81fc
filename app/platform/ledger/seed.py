from __future__ import annotations

import logging

from app.core.database import SessionLocal
from app.logging import configure_logging
from app.platform.ledger.accounts import account_directory


logger = logging.getLogger("app.ledger.seed")


def main() -> None:
    """Load the default restaurant chart of accounts into the configured database."""
    configure_logging()
    with SessionLocal() as session:
        created = account_directory.seed_chart_of_accounts(session)
    logger.info("ledger.accounts.seed_complete", extra={"account_count": len(created)})


if __name__ == "__main__":
    main()

import logging

from dashboard.db.engine import get_engine
from dashboard.db.schema import metadata
from dashboard.logging import configure_logging

logger = logging.getLogger(__name__)


def main():
    configure_logging()
    engine = get_engine()
    metadata.drop_all(engine)
    metadata.create_all(engine)
    logger.info("DB schema created.")

if __name__ == "__main__":
    main()

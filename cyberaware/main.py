"""Main entry point: configure logging, validate config and open the store"""
import logging
from typing import Optional

from cyberaware.config import LOG_LEVEL, STORAGE_PATH, validate_config
from cyberaware.observability.metrics import init_metrics
from cyberaware.services.container import ServiceContainer
from cyberaware.store.container import GameStore
from cyberaware.store.persistence import KeyValueStorage

logger = logging.getLogger(__name__)


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging in the application's standard format"""
    logging.basicConfig(
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        level=getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO)
    )


def bootstrap(storage: Optional[KeyValueStorage] = None) -> ServiceContainer:
    """
    Validate configuration and build a ready-to-use container

    Args:
        storage: key-value backend, the JSON file at STORAGE_PATH by default

    Raises:
        ConfigurationError: if configuration is invalid
    """
    logger.info("Validating configuration...")
    validate_config()

    init_metrics()

    logger.info("Opening game store...")
    store = GameStore.create(storage=storage)
    return ServiceContainer(store=store)


def main() -> None:
    """Open the store, report what was loaded and close it again"""
    configure_logging()
    container = None
    try:
        container = bootstrap()
        state = container.store.state
        logger.info(f"Loaded {len(state.roster)} registered profiles from {STORAGE_PATH}")
        for profile in state.roster:
            logger.info(f"  {profile.nickname} ({profile.role}): level {profile.level}, {profile.xp} XP")
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        raise
    finally:
        if container:
            container.dispose()
        logger.info("Shutdown complete")


if __name__ == "__main__":
    main()

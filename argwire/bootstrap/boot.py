from argwire.bootstrap.deps import get_config, get_registry
from argwire.core.codecs.registry import SchemeRegistry
from argwire.core.helpers.utils import setup_logging


def configure() -> SchemeRegistry:
    """
    Entry point for an embedding process: load the configuration, set up
    logging and return the process-wide SchemeRegistry.
    """
    config = get_config()
    setup_logging(config.log_level)
    return get_registry()

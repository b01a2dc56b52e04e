import logging

from pickleseal.bootstrap.deps import get_config, get_crypto
from pickleseal.core.facade import LegacyCrypto
from pickleseal.core.helpers.utils import setup_logging


def bootstrap() -> LegacyCrypto:
    """
    Load configuration, set up logging and return the shared facade.
    Meant to be called once by the application embedding pickleseal.
    """
    config = get_config()
    setup_logging(config.log_level)

    logger = logging.getLogger("pickleseal.bootstrap")
    logger.info(
        f"Legacy crypto ready (key derivation cache "
        f"{'enabled' if config.cache_derived_key else 'disabled'})"
    )
    return get_crypto()

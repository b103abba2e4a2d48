import logging

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'

log = logging.getLogger('iobuf')


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT)

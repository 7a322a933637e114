import logging


logger = logging.getLogger('correiosparser')
logger.addHandler(logging.NullHandler())

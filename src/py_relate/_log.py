import logging
import time
from typing import Iterable, Optional

from colorlog import ColoredFormatter


PACKAGE_LOGGER = 'py_relate'

LOG_FORMAT = '%(asctime)s %(log_color)s%(levelname)-7s%(reset)s %(name)s: %(message)s'

LOG_COLORS = {
	'DEBUG': 'cyan',
	'INFO': 'green',
	'WARNING': 'yellow',
	'ERROR': 'red',
	'CRITICAL': 'bold_red',
}


class UTCColoredFormatter(ColoredFormatter):
	'''
	Colour formatter stamping records in UTC, ISO8601 with a trailing 'Z'.
	'''

	converter = time.gmtime

	def formatTime(self, record, datefmt=None):
		if datefmt:
			return super().formatTime(record, datefmt)
		return time.strftime('%Y-%m-%dT%H:%M:%SZ', self.converter(record.created))


def setup_logging(
	loglevel: str = 'info',
	silence: Iterable[str] = (),
	relate_level: Optional[str] = None,
) -> logging.Handler:
	"""
	Send log records to stderr through a single colour handler.

	Joins and binds log one summary line each at DEBUG under the
	``py_relate`` logger. ``relate_level`` sets that logger on its own, so
	``setup_logging('warning', relate_level='debug')`` shows py-relate's
	operation log without debug output from anything else. Loggers named
	in ``silence`` are held at WARNING.
	"""
	for noisy in silence:
		logging.getLogger(noisy).setLevel(logging.WARNING)

	package_logger = logging.getLogger(PACKAGE_LOGGER)
	package_logger.setLevel(relate_level.upper() if relate_level else logging.NOTSET)

	root = logging.getLogger()
	# calling twice must not stack handlers
	root.handlers.clear()

	handler = logging.StreamHandler()
	handler.setFormatter(UTCColoredFormatter(LOG_FORMAT, log_colors=LOG_COLORS))
	root.addHandler(handler)
	root.setLevel(loglevel.upper())
	return handler

import json
import logging
import sys
from datetime import datetime, timezone

CONSOLE_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)-20s | %(message)s'


class JSONFormatter(logging.Formatter):
	"""One JSON object per record, for log shippers."""

	def format(self, record: logging.LogRecord) -> str:
		entry = {
			'timestamp': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
			'level': record.levelname,
			'logger': record.name,
			'message': record.getMessage(),
			'module': record.module,
			'function': record.funcName,
			'line': record.lineno,
		}
		if record.exc_info and record.exc_info[0] is not None:
			entry['exception'] = {
				'type': record.exc_info[0].__name__,
				'message': str(record.exc_info[1]),
				'traceback': self.formatException(record.exc_info),
			}
		return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(level: str = 'INFO', json_output: bool = False) -> None:
	root_logger = logging.getLogger()
	root_logger.handlers.clear()
	root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

	logging.getLogger('httpx').setLevel(logging.WARNING)

	handler = logging.StreamHandler(sys.stdout)
	if json_output:
		handler.setFormatter(JSONFormatter())
	else:
		handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt='%H:%M:%S'))
	root_logger.addHandler(handler)

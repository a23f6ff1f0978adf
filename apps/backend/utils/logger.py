import logging
from pythonjsonlogger import jsonlogger
import sys
from datetime import datetime
from typing import Optional

DEFAULT_LOG_FILE = 'firestore_migrate.log'


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    def add_fields(self, log_record, record, message_dict):
        super(CustomJsonFormatter, self).add_fields(log_record, record, message_dict)
        if not log_record.get('timestamp'):
            log_record['timestamp'] = datetime.utcnow().strftime('%Y-%m-%dT%H:%M:%S.%fZ')
        if log_record.get('level'):
            log_record['level'] = log_record['level'].upper()
        else:
            log_record['level'] = record.levelname


def get_logger(name, log_file: Optional[str] = DEFAULT_LOG_FILE):
    logger = logging.getLogger(name)

    # Avoid adding handlers multiple times
    if not logger.handlers:
        formatter = CustomJsonFormatter('%(timestamp)s %(level)s %(name)s %(message)s')

        # File Handler - Always UTF-8
        if log_file:
            try:
                fh = logging.FileHandler(log_file, encoding='utf-8')
                fh.setFormatter(formatter)
                logger.addHandler(fh)
            except OSError as e:
                print(f"Failed to initialize FileHandler: {e}")

        sh = logging.StreamHandler(sys.stdout)
        sh.setFormatter(formatter)
        logger.addHandler(sh)

        logger.setLevel(logging.INFO)
        logger.propagate = False

    return logger

"""Logging setup shared by the web app and the ledger package."""
import logging
import logging.config


def build_logging_config(level='INFO'):
    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'default': {
                # RichHandler renders time and level itself
                'format': '%(name)s - %(message)s',
                'datefmt': '%Y-%m-%d %H:%M:%S',
            },
        },
        'handlers': {
            'default': {
                'class': 'rich.logging.RichHandler',
                'formatter': 'default',
                'level': 'DEBUG',
                'rich_tracebacks': True,
                'show_time': True,
                'show_path': False,
                'log_time_format': '%Y-%m-%d %H:%M:%S',
            },
        },
        'loggers': {
            'werkzeug': {
                'handlers': ['default'],
                'level': 'INFO',
                'propagate': False,
            },
            '': {
                'handlers': ['default'],
                'level': level,
                'propagate': False,
            },
        },
    }


def configure_logging(level='INFO'):
    logging.config.dictConfig(build_logging_config(level))

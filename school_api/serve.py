"""Run the School API with uvicorn.

Usage:
    python -m school_api.serve
"""
import logging

import uvicorn

from school_api.core import config


def main() -> None:
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
    config.validate_runtime_config()
    uvicorn.run('school_api.main:app', host=config.HOST, port=config.PORT, reload=config.DEBUG)


if __name__ == '__main__':
    main()

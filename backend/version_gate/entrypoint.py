from __future__ import annotations
import logging
import os
from version_gate.core.config import settings
from version_gate.core.logging_config import configure_logging

_log = logging.getLogger(__name__)


def main():
    configure_logging(settings.log_level)
    host = os.getenv('VERSION_GATE_HOST', '127.0.0.1')
    port = int(os.getenv('VERSION_GATE_PORT', '4160'))
    _log.info("starting version gate url=%s db=%s on %s:%s", settings.gate_url, settings.database_url, host, port)
    import uvicorn
    uvicorn.run(
        'version_gate.main:app',
        host=host,
        port=port,
        reload=False,
        log_level=settings.log_level.lower(),
    )


if __name__ == '__main__':  # pragma: no cover
    main()

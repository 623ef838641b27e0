from __future__ import annotations

import uvicorn

from peoplenrich.common.settings import get_settings


def main() -> None:
    cfg = get_settings()
    uvicorn.run(
        "peoplenrich.services.api.app:app",
        host=cfg.api.host,
        port=cfg.api.port,
        log_level=cfg.log_level.lower(),
    )


if __name__ == "__main__":
    main()

import uvicorn

from cookbook import config


def main() -> None:
    cfg = config.Config()
    uvicorn.run(
        "cookbook.app:create_app",
        factory=True,
        host=cfg.host,
        port=cfg.port,
        reload=cfg.env == config.Env.local,
        log_level=cfg.log_level.lower(),
    )


if __name__ == "__main__":
    main()

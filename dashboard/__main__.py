import uvicorn

from dashboard.db.settings import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run("dashboard.main:app", host=settings.app_host, port=settings.app_port)


if __name__ == "__main__":
    main()

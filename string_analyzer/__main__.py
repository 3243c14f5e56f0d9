import uvicorn

from string_analyzer.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run("string_analyzer.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()

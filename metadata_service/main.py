import uvicorn

from metadata_service.core.config import settings


def main():
    uvicorn.run("metadata_service.server:app", host=settings.HOST, port=settings.PORT, reload=settings.RELOAD)


if __name__ == '__main__':
    main()

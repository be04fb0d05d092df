import uvicorn

from shop_inventory.config import settings


def main():
    uvicorn.run("shop_inventory.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()

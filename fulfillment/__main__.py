import uvicorn

from fulfillment.config import get_settings
from fulfillment.main import create_app

if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(create_app(), host="0.0.0.0", port=settings.port)

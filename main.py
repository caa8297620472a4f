import uvicorn
from docbridge.api.app import create_app
from docbridge.config.settings import API_HOST, API_PORT, DEBUG

app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=API_HOST,
        port=API_PORT,
        reload=DEBUG
    )

# chatrooms/core/config.py
import os
from dotenv import load_dotenv


class Settings:
    """
    Setup environment variables.
        - CHATROOMS_HOST / CHATROOMS_PORT where the server binds
        - CHATROOMS_TIMEOUT_KEEP_ALIVE idle keep-alive timeout handed to uvicorn
        - CHATROOMS_SERVER_URL the server the CLI client talks to by default
        - CHATROOMS_CLIENT_TIMEOUT per-request timeout of the CLI client
    """

    # Load environment variables from the .env file
    load_dotenv()

    HOST: str = os.getenv("CHATROOMS_HOST", "0.0.0.0")
    PORT: int = int(os.getenv("CHATROOMS_PORT", "8080"))
    TIMEOUT_KEEP_ALIVE: int = int(os.getenv("CHATROOMS_TIMEOUT_KEEP_ALIVE", "60"))

    SERVER_URL: str = os.getenv("CHATROOMS_SERVER_URL", "http://localhost:8080")
    CLIENT_TIMEOUT: float = float(os.getenv("CHATROOMS_CLIENT_TIMEOUT", "15"))


settings = Settings()

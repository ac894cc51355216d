"""Server entrypoint: starts uvicorn with the port from env."""
import os
import uvicorn

from brokerage.main import app


def main() -> None:
    port = int(os.environ.get("BACKEND_PORT", "8001"))
    host = os.environ.get("BACKEND_HOST", "127.0.0.1")
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()

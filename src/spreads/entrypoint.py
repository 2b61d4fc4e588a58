"""Console entrypoint: serves the API with uvicorn on HOST/PORT from the environment."""
import os

import uvicorn

from spreads.main import app


def main() -> None:
    host = os.environ.get("HOST", "127.0.0.1")
    port = int(os.environ.get("PORT", "8001"))
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()

import os

import uvicorn

from api.app import app


if __name__ == "__main__":
    uvicorn.run(
        app,
        host=os.environ.get("FORM_BUILDER_HOST", "127.0.0.1"),
        port=int(os.environ.get("PORT", "3001")),
    )

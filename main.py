"""
Entrypoint for the KTM workshop management API.

    uvicorn main:app --port 3000
or
    python main.py
"""

import uvicorn

from workshop_mgmt.config import settings
from workshop_mgmt.main import app


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=settings.port)

from datetime import UTC, datetime

from fastapi import APIRouter

import config

router = APIRouter(tags=["demo"])


@router.get("/ping")
def ping():
    return {"message": config.PING_MESSAGE}


@router.get("/demo")
def demo():
    return {"message": "FormCraft API is working!", "timestamp": datetime.now(UTC).isoformat()}

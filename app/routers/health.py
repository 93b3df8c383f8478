from fastapi import APIRouter, Depends
from app.services.notifier import Notifier, get_notifier

router = APIRouter()

@router.get("/z")
def healthz(notifier: Notifier = Depends(get_notifier)):
    # Check si l'API est up + nombre d'abonnés aux subscriptions
    return {"status": "ok", "subscribers": notifier.subscriber_count()}

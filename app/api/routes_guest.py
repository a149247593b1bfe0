"""
Guest-facing API routes
"""

from fastapi import APIRouter, Depends

from app.api.deps import get_checkin_service
from app.services.checkin_service import CheckInService
from app.utils.responses import success_response

router = APIRouter()

@router.post("/{guest_id}/check-in")
def check_in_guest(
    guest_id: int,
    checkin: CheckInService = Depends(get_checkin_service),
):
    """Check in a guest whose card was scanned at the door"""
    result = checkin.check_in_guest(guest_id)
    message = "Guest already checked in" if result.was_already_checked_in else "Guest checked in successfully"
    return success_response(message=message, data=result)

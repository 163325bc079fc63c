from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from typing import Any, Optional

from app.core.errors import ReservationError, UnexpectedError, UnknownAction
from app.core.logger import logger
from app.models.reservation import DuplicateProbe
from app.models.responses import ApiResponse

router = APIRouter()


def create_json_response(result: str, data: Any = None, error: Optional[str] = None, status_code: int = 200) -> JSONResponse:
    """Every answer, success or failure, goes out in the same envelope."""
    body = ApiResponse(result=result, data=data, error=error)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def error_response(exc: ReservationError) -> JSONResponse:
    return create_json_response("error", None, exc.message, status_code=exc.status_code)


@router.post("/reservations")
async def create_reservation(request: Request):
    service = request.app.state.reservation_service
    try:
        try:
            payload = await request.json()
        except ValueError as e:
            raise UnexpectedError(f"Invalid JSON body: {e}") from e

        created = await service.submit(payload)
        return create_json_response("success", created.model_dump())

    except ReservationError as e:
        logger.info(f"📭 Reservation rejected: {e.message}")
        return error_response(e)
    except Exception as e:
        logger.exception(f"❌ Error in create_reservation: {e}")
        return error_response(UnexpectedError(str(e)))


@router.get("/reservations")
async def read_reservations(request: Request, action: Optional[str] = None):
    queries = request.app.state.query_service
    params = request.query_params
    try:
        if action == "getData":
            summary = await queries.get_quota_summary()
            return create_json_response("success", summary.model_dump())

        elif action == "getRegistrants":
            registrants = await queries.get_recent_registrants()
            return create_json_response("success", [r.model_dump(by_alias=True) for r in registrants])

        elif action == "checkDuplicate":
            probe = DuplicateProbe(
                booker_name=params.get("namaPemesan") or None,
                national_id=params.get("nik") or None,
                phone=params.get("noHp") or None,
            )
            check = await queries.check_duplicate(probe)
            return create_json_response("success", check.model_dump())

        raise UnknownAction(action)

    except ReservationError as e:
        logger.warning(f"⚠️ Read action '{action}' failed: {e.message}")
        return error_response(e)
    except Exception as e:
        logger.exception(f"❌ Error in read action '{action}': {e}")
        return error_response(UnexpectedError(str(e)))

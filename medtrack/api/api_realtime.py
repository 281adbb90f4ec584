import logging

from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect

from medtrack.helpers.exception_handler import CustomException
from medtrack.services.srv_user import user_id_from_token
from medtrack.services.ws_manager import realtime_manager

logger = logging.getLogger(__name__)
router = APIRouter()


@router.websocket('/ws')
async def realtime_changes(websocket: WebSocket, token: str = Query(...)):
    """
    Change signals for the token's account.

    Messages look like {"type": "change", "table": "medications", "event": "UPDATE"}
    and carry no row data; clients reload on every signal.
    """
    try:
        user_id = str(user_id_from_token(token))
    except CustomException as e:
        await websocket.close(code=4001, reason=e.message)
        return

    connection = await realtime_manager.connect(websocket, user_id)
    if connection is None:
        return

    try:
        await websocket.send_json({"type": "subscribed", "user_id": user_id})
        while True:
            # Clients only listen; anything they send is ignored
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        await realtime_manager.disconnect(websocket, user_id)

"""
Editor API endpoints.

Routes:
- POST /editor/session - Editor configuration for a document version
- POST /editor/callback - Status callback from the editor server (no user header)

Dependencies: legalai.application.services, legalai.models
System role: Document editor HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from legalai.api.deps import (
    get_current_user_id,
    get_current_user_name,
    get_editor_session_service,
)
from legalai.api.routers.error_handling import handle_domain_errors
from legalai.application.services.editor_session_service import EditorSessionService
from legalai.models.common import SuccessResponse
from legalai.models.editor import (
    EditorCallbackPayload,
    EditorCallbackResponse,
    EditorConfig,
    EditorSessionRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/editor", tags=["editor"])


@router.post("/session", response_model=SuccessResponse[EditorConfig])
@handle_domain_errors
async def create_session(
    request: EditorSessionRequest,
    user_id: str = Depends(get_current_user_id),
    user_name: str = Depends(get_current_user_name),
    editor_service: EditorSessionService = Depends(get_editor_session_service),
) -> SuccessResponse[EditorConfig]:
    """
    Open an editor session on a document version.

    Raises:
        HTTPException(400): versionId missing
        HTTPException(401): X-User-Id header missing
        HTTPException(404): Version not found
    """
    if request.version_id is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="versionId is required",
        )
    config = await editor_service.create_session(request.version_id, user_id, user_name)
    return SuccessResponse(data=config)


@router.post("/callback", response_model=EditorCallbackResponse)
async def handle_callback(
    payload: EditorCallbackPayload,
    editor_service: EditorSessionService = Depends(get_editor_session_service),
):
    """
    Receive an editor status callback.

    The editor server expects {"error": 0} on success; failures answer
    {"error": 1} with status 500.
    """
    try:
        result = await editor_service.handle_callback(payload)
    except Exception as e:
        logger.exception("Editor callback failed", extra={"error": str(e)})
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": 1})
    return EditorCallbackResponse(**result)

"""
Editor session schemas.

Configuration handed to the browser-based document editor, and the
status callback the editor server posts back.

Dependencies: pydantic
System role: Editor integration API contracts
"""

import uuid
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class EditorSessionRequest(BaseModel):
    """Request schema for opening an editor session."""

    model_config = ConfigDict(populate_by_name=True)

    version_id: uuid.UUID | None = Field(default=None, alias="versionId")


class EditorUser(BaseModel):
    id: str
    name: str


class EditorPermissions(BaseModel):
    edit: bool
    download: bool = True
    review: bool = True
    comment: bool = True


class EditorConfig(BaseModel):
    """Editor configuration for one document version."""

    model_config = ConfigDict(populate_by_name=True)

    document_key: str = Field(alias="documentKey")
    document_url: str = Field(alias="documentUrl")
    document_type: Literal["word", "pdf"] = Field(alias="documentType")
    editor_type: Literal["desktop", "mobile", "embedded"] = Field(
        default="desktop", alias="editorType"
    )
    server_url: str | None = Field(default=None, alias="serverUrl")
    user: EditorUser
    permissions: EditorPermissions
    callback_url: str = Field(alias="callbackUrl")
    token: str | None = None


class EditorCallbackPayload(BaseModel):
    """
    Status callback from the editor server.

    Status codes:
        0: no document with the key found
        1: document being edited
        2: document ready for saving
        3: document saving error
        4: document closed with no changes
        6: document being edited, force save requested
        7: error force saving
    """

    model_config = ConfigDict(extra="allow")

    status: int
    key: str | None = None
    url: str | None = None
    users: list[str] | None = None


class EditorCallbackResponse(BaseModel):
    error: int = 0

"""FastAPI server exposing progress, class and analytics endpoints."""

from __future__ import annotations

import logging
from threading import Thread
from typing import Any

from fastapi import Depends, FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel
import uvicorn

from kinmen_app.constants.about import APP_NAME, APP_VERSION
from kinmen_app.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from kinmen_app.core.markdown_renderer import renderer
from kinmen_app.core.models import Course, MatchingContent
from kinmen_app.core.progress_manager import ProgressManager
from kinmen_app.core.services.class_service import ClassNotFoundError, InviteCodeNotFoundError
from kinmen_app.core.services.progress_service import (
    ProgressNotFoundError,
    StudentExistsError,
    format_progress,
)

logger = logging.getLogger(__name__)


class StudentPayload(BaseModel):
    """Payload schema for creating a student progress record."""

    username: str


class ProgressUpdatePayload(BaseModel):
    """Payload schema for partial progress updates."""

    username: str
    vocabulary: dict[str, Any] | None = None
    dialogue: dict[str, Any] | None = None
    practice: dict[str, Any] | None = None


class GameResultPayload(BaseModel):
    game_type: str
    score: int = 0


class VocabularyLearnedPayload(BaseModel):
    vocab_id: int


class CreateClassPayload(BaseModel):
    teacher_username: str
    class_name: str


class JoinClassPayload(BaseModel):
    username: str
    invite_code: str


def _get_dependency(value):
    def dependency():
        return value

    return dependency


def _serialize_matching(content: MatchingContent) -> dict[str, Any]:
    def terms(items):
        return [{"value": t.value, "x": t.position.x, "y": t.position.y} for t in items]

    return {
        "leftPoints": terms(content.left_terms),
        "rightPoints": terms(content.right_terms),
        "pairs": [{"left": left, "right": right} for left, right in sorted(content.answer_key.pairs)],
    }


def create_api_app(progress_manager: ProgressManager, course: Course | None = None) -> FastAPI:
    """Create a FastAPI application wired to the provided progress manager."""
    app = FastAPI(title=f"{APP_NAME} API", version=APP_VERSION)
    manager_dep = _get_dependency(progress_manager)

    @app.get("/")
    def get_course_summary() -> dict[str, object]:
        if course is None:
            return {"title": None, "slide_count": 0}
        return {"title": course.title, "slide_count": course.slide_count()}

    @app.get("/slides/{index}")
    def get_slide(index: int) -> dict[str, object]:
        if course is None:
            raise HTTPException(status_code=404, detail="No course loaded.")
        try:
            slide = course.get_slide(index)
        except IndexError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return {
            "id": slide.id,
            "title": slide.title,
            "type": slide.slide_type,
            "notes_html": renderer.render_fragment(slide.notes),
            "audio": slide.audio,
            "matchingData": _serialize_matching(slide.matching) if slide.matching else None,
        }

    @app.get("/slides/{index}/notes", response_class=HTMLResponse)
    def get_slide_notes(index: int) -> str:
        if course is None:
            raise HTTPException(status_code=404, detail="No course loaded.")
        try:
            slide = course.get_slide(index)
        except IndexError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return renderer.render_full_document(slide.notes, title=slide.title)

    @app.post("/students", status_code=201)
    def create_student(
        payload: StudentPayload,
        manager: ProgressManager = Depends(manager_dep),
    ) -> dict[str, object]:
        try:
            item = manager.create_student(payload.username)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except StudentExistsError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        return {"success": True, "username": item["username"], "progress": format_progress(item)}

    @app.get("/progress/{username}")
    def get_progress(username: str, manager: ProgressManager = Depends(manager_dep)) -> dict[str, object]:
        try:
            item = manager.get_progress(username)
        except ProgressNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return {"success": True, "progress": format_progress(item)}

    @app.put("/progress")
    def update_progress(
        payload: ProgressUpdatePayload,
        manager: ProgressManager = Depends(manager_dep),
    ) -> dict[str, object]:
        try:
            item = manager.update_progress(
                payload.username,
                vocabulary=payload.vocabulary,
                dialogue=payload.dialogue,
                practice=payload.practice,
            )
        except ProgressNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return {"success": True, "progress": format_progress(item)}

    @app.post("/progress/{username}/games")
    def record_game(
        username: str,
        payload: GameResultPayload,
        manager: ProgressManager = Depends(manager_dep),
    ) -> dict[str, object]:
        try:
            item = manager.record_game_played(username, payload.game_type, payload.score)
        except ProgressNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return {"success": True, "statistics": item["statistics"], "achievements": item["achievements"]}

    @app.post("/progress/{username}/vocabulary")
    def record_vocabulary(
        username: str,
        payload: VocabularyLearnedPayload,
        manager: ProgressManager = Depends(manager_dep),
    ) -> dict[str, object]:
        try:
            item = manager.record_vocabulary_learned(username, payload.vocab_id)
        except ProgressNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return {"success": True, "statistics": item["statistics"], "achievements": item["achievements"]}

    @app.get("/students/{username}")
    def get_student_detail(username: str, manager: ProgressManager = Depends(manager_dep)) -> dict[str, object]:
        try:
            detail = manager.student_detail(username)
        except ProgressNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return {"success": True, **detail}

    @app.post("/classes", status_code=201)
    def create_class(
        payload: CreateClassPayload,
        manager: ProgressManager = Depends(manager_dep),
    ) -> dict[str, object]:
        try:
            item = manager.create_class(payload.teacher_username, payload.class_name)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        logger.info("Class %s created by %s", item["classId"], item["teacherUsername"])
        return {
            "success": True,
            "class_id": item["classId"],
            "class_name": item["className"],
            "invite_code": item["inviteCode"],
        }

    @app.post("/classes/join")
    def join_class(
        payload: JoinClassPayload,
        manager: ProgressManager = Depends(manager_dep),
    ) -> dict[str, object]:
        try:
            item = manager.join_class(payload.username, payload.invite_code)
        except (InviteCodeNotFoundError, ProgressNotFoundError) as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return {"success": True, "class_id": item["classId"], "class_name": item["className"]}

    @app.get("/classes/{class_id}/students")
    def list_class_students(class_id: str, manager: ProgressManager = Depends(manager_dep)) -> dict[str, object]:
        try:
            roster = manager.list_class_students(class_id)
        except ClassNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return {"success": True, **roster}

    @app.get("/classes/{class_id}/analytics")
    def get_class_analytics(class_id: str, manager: ProgressManager = Depends(manager_dep)) -> dict[str, object]:
        try:
            analytics = manager.get_class_analytics(class_id)
        except ClassNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return {"success": True, **analytics}

    @app.get("/teachers/{teacher_username}/analytics")
    def get_teacher_analytics(
        teacher_username: str,
        manager: ProgressManager = Depends(manager_dep),
    ) -> dict[str, object]:
        return {"success": True, **manager.get_teacher_analytics(teacher_username)}

    return app


def start_api_server(
    progress_manager: ProgressManager,
    course: Course | None = None,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> Thread:
    """Start the FastAPI server in a background daemon thread."""
    app = create_api_app(progress_manager, course)
    config = uvicorn.Config(app=app, host=host, port=port, log_level="info")
    server = uvicorn.Server(config)

    def run_server() -> None:
        server.run()

    thread = Thread(target=run_server, name="CourseApiServer", daemon=True)
    thread.start()
    return thread

"""
Faculty Routes - quizzes and coding problems (own rows only)

GET    /faculty/quizzes - Own quizzes, newest first
POST   /faculty/quizzes - Create a quiz
PATCH  /faculty/quizzes/{id}/toggle - Flip is_active
DELETE /faculty/quizzes/{id}
GET    /faculty/coding-problems - Own problems, newest first
POST   /faculty/coding-problems - Create a problem
DELETE /faculty/coding-problems/{id}
"""

from fastapi import APIRouter, Depends, HTTPException

from placement_portal.core.auth import require_roles
from placement_portal.schemas.schemas import (
    CodingProblemForm, CurrentUser, MessageResponse, QuizForm, UserRole
)
from placement_portal.services import management_service

router = APIRouter(prefix="/faculty", tags=["Faculty"])

staff = require_roles(UserRole.faculty, UserRole.admin, UserRole.super_admin)


@router.get("/quizzes")
async def list_quizzes(user: CurrentUser = Depends(staff)):
    return management_service.list_quizzes(user)


@router.post("/quizzes", status_code=201)
async def create_quiz(form: QuizForm, user: CurrentUser = Depends(staff)):
    quiz = management_service.create_quiz(user, form)
    return {"message": "Quiz created successfully", "success": True, "quiz": quiz}


@router.patch("/quizzes/{quiz_id}/toggle")
async def toggle_quiz(quiz_id: int, user: CurrentUser = Depends(staff)):
    quiz = management_service.toggle_quiz(user, quiz_id)
    if quiz is None:
        raise HTTPException(status_code=404, detail="Quiz not found")
    return quiz


@router.delete("/quizzes/{quiz_id}", response_model=MessageResponse)
async def delete_quiz(quiz_id: int, user: CurrentUser = Depends(staff)):
    if not management_service.delete_quiz(user, quiz_id):
        raise HTTPException(status_code=404, detail="Quiz not found")
    return MessageResponse(message="Quiz deleted successfully")


@router.get("/coding-problems")
async def list_problems(user: CurrentUser = Depends(staff)):
    return management_service.list_problems(user)


@router.post("/coding-problems", status_code=201)
async def create_problem(form: CodingProblemForm, user: CurrentUser = Depends(staff)):
    problem = management_service.create_problem(user, form)
    return {"message": "Coding problem created successfully", "success": True, "problem": problem}


@router.delete("/coding-problems/{problem_id}", response_model=MessageResponse)
async def delete_problem(problem_id: int, user: CurrentUser = Depends(staff)):
    if not management_service.delete_problem(user, problem_id):
        raise HTTPException(status_code=404, detail="Problem not found")
    return MessageResponse(message="Problem deleted successfully")

import logging
import random
from collections import OrderedDict
from typing import List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from answer_evaluator import check_answer, normalize_answer
from question_bank import Difficulty, Question, QuestionGenerator
from score_store import ScoreStore, ScoreStoreError
from settings import load_settings


# SETTINGS & LOGGING

settings = load_settings()
logging.basicConfig(level=settings.level)
logger = logging.getLogger("aptitude-api")
logger.setLevel(settings.level)


# FASTAPI INIT

app = FastAPI(
    title="Aptitude Practice API",
    version="1.0.0",
    docs_url="/api/docs",
    openapi_url="/api/openapi.json"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# QUESTION BANK

generator = QuestionGenerator(random.Random(settings.seed))
if settings.seed is not None:
    logger.info("Question bank seeded with %d", settings.seed)


# IN-MEMORY STORAGE

MAX_STORED_QUESTIONS = 1000

questions: "OrderedDict[int, Question]" = OrderedDict()
store = ScoreStore(settings.score_file)


# Pydantic MODELS

class QuestionRequest(BaseModel):
    difficulty: int = Field(default=2, ge=1, le=3)
    variant: Optional[int] = Field(default=None, ge=0, le=9)


class AnswerCheckRequest(BaseModel):
    question_id: int
    answer: str


class QuestionResponse(BaseModel):
    id: int
    difficulty: int
    difficulty_label: str
    variant: str
    prompt: str
    options: Optional[List[str]] = None
    points: int



# HEALTH

@app.get("/")
def root():
    return {"status": "running", "docs": "/api/docs"}


@app.get("/api/health")
def health():
    return {
        "status": "ok",
        "stored_questions": len(questions)
    }



# QUESTION ENDPOINTS

@app.post("/api/questions/generate", response_model=QuestionResponse)
def generate_question(req: QuestionRequest):
    question = generator.generate(req.difficulty, req.variant)
    questions[question.id] = question
    while len(questions) > MAX_STORED_QUESTIONS:
        questions.popitem(last=False)

    return QuestionResponse(
        id=question.id,
        difficulty=int(question.difficulty),
        difficulty_label=question.difficulty.label,
        variant=question.variant.name.lower(),
        prompt=question.prompt,
        options=list(question.options) if question.options else None,
        points=question.points,
    )



# ANSWERS

@app.post("/api/answers/check")
def check(req: AnswerCheckRequest):
    question = questions.get(req.question_id)
    if question is None:
        raise HTTPException(404, "Question not found")

    correct = check_answer(question, req.answer)
    return {
        "question_id": question.id,
        "correct": correct,
        "correct_answer": question.answer,
        "points_earned": question.points if correct else 0
    }



# SCORES

@app.get("/api/scores")
def scores():
    try:
        stored = store.read_lines()
    except ScoreStoreError as exc:
        logger.warning("Score log unavailable: %s", exc)
        return {"scores": [], "warning": str(exc)}
    return {"scores": stored}



# UTILITIES

@app.get("/api/utils/validate-answer")
def validate_answer(answer: str):
    normalized = normalize_answer(answer)
    return {
        "valid": bool(normalized),
        "normalized": normalized,
        "length": len(normalized)
    }


@app.get("/api/utils/difficulty-levels")
def difficulty_levels():
    return {
        "levels": {
            d.label.lower(): {"value": int(d), "points": d.points}
            for d in Difficulty
        }
    }



# RUN

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "fastapi_app:app",
        host="127.0.0.1",
        port=8001,
        reload=True
    )

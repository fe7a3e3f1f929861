import os
import time
import logging
from pathlib import Path
from fastapi import FastAPI, Request, Header
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from typing import List, Optional
from dotenv import load_dotenv

from matchmaking.scoring import score_profiles

BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(BASE_DIR / '.env')

logging.basicConfig(
    level=logging.INFO,
    format='[%(asctime)s] %(levelname)s %(name)s: %(message)s'
)
logger = logging.getLogger('teamup.fastapi')

CORS_ORIGINS = os.getenv(
    'CORS_ORIGINS',
    'http://localhost:5173,http://127.0.0.1:5173'
)
FASTAPI_API_KEY = os.getenv('FASTAPI_API_KEY', '').strip()

app = FastAPI(title='Teamup Scoring API')
app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in CORS_ORIGINS.split(',') if origin.strip()],
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)


@app.middleware('http')
async def log_requests(request: Request, call_next):
    start = time.time()
    try:
        response = await call_next(request)
    except Exception:
        logger.exception('Unhandled request error: method=%s path=%s', request.method, request.url.path)
        raise
    duration_ms = round((time.time() - start) * 1000, 2)
    if response.status_code >= 500:
        logger.error(
            'HTTP %s %s -> %s in %sms',
            request.method,
            request.url.path,
            response.status_code,
            duration_ms
        )
    elif response.status_code >= 400:
        logger.warning(
            'HTTP %s %s -> %s in %sms',
            request.method,
            request.url.path,
            response.status_code,
            duration_ms
        )
    else:
        logger.info(
            'HTTP %s %s -> %s in %sms',
            request.method,
            request.url.path,
            response.status_code,
            duration_ms
        )
    return response


class SkillProfile(BaseModel):
    user_id: Optional[str] = None
    role: str = ''
    skills_have: List[str] = Field(default_factory=list)
    skills_need: List[str] = Field(default_factory=list)


class ScoreRequest(BaseModel):
    profile_a: SkillProfile
    profile_b: SkillProfile


class ScoreResponse(BaseModel):
    reasons: List[str]
    bucket: str
    score: int


class MatchRequest(BaseModel):
    profile: SkillProfile
    candidates: List[SkillProfile]


class MatchResult(ScoreResponse):
    user_id: Optional[str] = None


def _unauthorized(x_api_key: Optional[str]) -> Optional[JSONResponse]:
    if FASTAPI_API_KEY and x_api_key != FASTAPI_API_KEY:
        return JSONResponse(status_code=401, content={'error': 'Unauthorized'})
    return None


@app.get('/health')
async def health():
    return {'status': 'ok'}


@app.post('/score', response_model=ScoreResponse)
async def score(payload: ScoreRequest, x_api_key: str | None = Header(default=None, alias='X-API-Key')):
    denied = _unauthorized(x_api_key)
    if denied:
        return denied
    result = score_profiles(payload.profile_a, payload.profile_b)
    return ScoreResponse(reasons=result.reasons, bucket=result.bucket.value, score=result.score)


@app.post('/match', response_model=List[MatchResult])
async def match_profiles(payload: MatchRequest, x_api_key: str | None = Header(default=None, alias='X-API-Key')):
    denied = _unauthorized(x_api_key)
    if denied:
        return denied
    results: List[MatchResult] = []
    for idx, candidate in enumerate(payload.candidates):
        result = score_profiles(payload.profile, candidate)
        results.append(
            MatchResult(
                user_id=candidate.user_id or str(idx),
                reasons=result.reasons,
                bucket=result.bucket.value,
                score=result.score,
            )
        )

    return sorted(results, key=lambda r: r.score, reverse=True)

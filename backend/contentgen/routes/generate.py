import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ..errors import RequestValidationFailed
from ..schemas import validate_generation_request
from ..services.generation import ContentGenerator
from ..streaming import text_stream_response

logger = logging.getLogger(__name__)

router = APIRouter()


def get_generator(request: Request) -> ContentGenerator:
    return request.app.state.generator


@router.post("/generate")
async def generate_content(request: Request, generator: ContentGenerator = Depends(get_generator)):
    try:
        data = validate_generation_request(await request.json())
        logger.info(
            "Generating %s content (length=%s, tone=%s, mode=%s)",
            data.content_type, data.length, data.tone, generator.mode,
        )
        chunks = await generator.open(data)
        return text_stream_response(chunks)
    except RequestValidationFailed as exc:
        logger.info("Rejected generation request: %s", exc.details)
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request data", "details": exc.details},
        )
    except Exception:
        logger.exception("Generation failed before streaming started")
        return JSONResponse(status_code=500, content={"error": "Generation failed"})

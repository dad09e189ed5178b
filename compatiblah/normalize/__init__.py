from .cascade import (
    ASSESSMENT_DECODERS,
    DecodeFailure,
    DecodeSuccess,
    SchemaDecoder,
    category_decoders,
    parse_assessment,
    parse_category_response,
    run_cascade,
)
from .extract import extract_json_object
from .sanitize import sanitize_json
from .structure import complete_document, structure_sections, structure_text


def clean_model_output(raw_text: str) -> str:
    """Isolate the JSON object in raw model text and repair trailing commas."""
    return sanitize_json(extract_json_object(raw_text))


__all__ = [
    "ASSESSMENT_DECODERS",
    "DecodeFailure",
    "DecodeSuccess",
    "SchemaDecoder",
    "category_decoders",
    "clean_model_output",
    "complete_document",
    "extract_json_object",
    "parse_assessment",
    "parse_category_response",
    "run_cascade",
    "sanitize_json",
    "structure_sections",
    "structure_text",
]

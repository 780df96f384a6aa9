"""
Vision Response Parser

Extracts detection candidates from the text a vision model returns.

Models are asked for JSON but routinely wrap it in Markdown fences,
surround it with prose, or answer in prose altogether. Parsing never
raises: structured parsing is tried first, then a best-effort
line-oriented extraction.
"""

import json
import logging
import math
import re
from typing import Any, Dict, List, Optional, Sequence, Tuple

from platewise.schemas import DetectionCandidate, ParseResult
from platewise.vehicles.vocabulary import COLOR_WORDS, TYPE_WORDS
from platewise.vision.timestamps import CAMERA_TIMESTAMP_RE


logger = logging.getLogger(__name__)


FENCE_RE = re.compile(r"```[A-Za-z]*[ \t]*\n?")

# Keys holding the vehicle list when the model wraps it in an object
LIST_KEYS = ("vehicles", "cars", "detections")

PLATE_KEYS = ("plate_number", "plateNumber", "plate", "license_plate", "licensePlate")
COLOR_KEYS = ("color", "colour")
TYPE_KEYS = ("type", "vehicle_type", "vehicleType")
CONFIDENCE_KEYS = ("confidence_score", "confidenceScore", "confidence")
TIMESTAMP_KEYS = ("timestamp",)
METADATA_KEYS = ("camera_metadata", "cameraMetadata", "camera_info")


def parse_response(raw_text: Optional[str]) -> ParseResult:
    """
    Parse a raw model response into detection candidates.

    Args:
        raw_text: Text returned by the vision model

    Returns:
        ParseResult; parse_failed is set when no structured payload could
        be decoded and the fallback extractor was used instead
    """
    if not raw_text or not isinstance(raw_text, str) or not raw_text.strip():
        return ParseResult(parse_failed=True)

    text = strip_code_fences(raw_text)
    payload = decode_payload(text)

    if payload is not None:
        structured = _from_payload(payload)
        if structured is not None:
            return structured

    logger.warning("Structured parse failed, falling back to line extraction")
    candidates = extract_from_prose(text)
    ts_match = CAMERA_TIMESTAMP_RE.search(text)

    return ParseResult(
        candidates=candidates,
        parse_failed=True,
        used_fallback=True,
        timestamp_text=ts_match.group(0) if ts_match else None,
    )


def strip_code_fences(text: str) -> str:
    """Remove Markdown code-fence markers"""
    return FENCE_RE.sub("", text).strip()


def decode_payload(text: str) -> Optional[Any]:
    """
    Decode the outermost JSON object/array embedded in text.

    Tries the span from the first opening bracket to the last matching
    closing bracket, then a string-aware balanced-bracket scan.

    Returns:
        Decoded JSON value, or None
    """
    start = _first_opener(text)
    if start is None:
        return None

    closer = "}" if text[start] == "{" else "]"
    end = text.rfind(closer)
    spans = []
    if end > start:
        spans.append(text[start:end + 1])
    balanced = _balanced_span(text, start)
    if balanced is not None and balanced not in spans:
        spans.append(balanced)

    for span in spans:
        try:
            return json.loads(span)
        except (ValueError, RecursionError):
            continue
    return None


def _first_opener(text: str) -> Optional[int]:
    positions = [i for i in (text.find("{"), text.find("[")) if i != -1]
    return min(positions) if positions else None


def _balanced_span(text: str, start: int) -> Optional[str]:
    expected = []
    in_string = False
    escaped = False

    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch == "{":
            expected.append("}")
        elif ch == "[":
            expected.append("]")
        elif ch in "}]":
            if not expected or expected.pop() != ch:
                return None
            if not expected:
                return text[start:i + 1]

    return None


def _from_payload(payload: Any) -> Optional[ParseResult]:
    timestamp_text = None
    camera_metadata = None

    if isinstance(payload, list):
        # A stray "[1]" in prose decodes fine but holds no vehicles
        if payload and not any(isinstance(item, dict) for item in payload):
            return None
        items = payload
    elif isinstance(payload, dict):
        items = _vehicle_list(payload)
        if items is None:
            return None
        timestamp_text = _as_text(_first(payload, TIMESTAMP_KEYS))
        camera_metadata = _as_text(_first(payload, METADATA_KEYS))
    else:
        return None

    candidates = []
    for item in items:
        if not isinstance(item, dict):
            logger.debug("Skipping non-object vehicle entry: %r", item)
            continue
        candidate = candidate_from_mapping(item)
        if candidate.timestamp_text is None:
            candidate.timestamp_text = timestamp_text
        if candidate.camera_metadata is None:
            candidate.camera_metadata = camera_metadata
        candidates.append(candidate)

    return ParseResult(
        candidates=candidates,
        timestamp_text=timestamp_text,
        camera_metadata=camera_metadata,
    )


def _vehicle_list(payload: Dict[str, Any]) -> Optional[List[Any]]:
    for key in LIST_KEYS:
        if key in payload:
            value = payload[key]
            return value if isinstance(value, list) else []

    # A bare vehicle object
    if _first(payload, PLATE_KEYS) is not None:
        return [payload]

    # Not a detection payload at all
    return None


def candidate_from_mapping(item: Dict[str, Any]) -> DetectionCandidate:
    """Build a candidate from one decoded vehicle object"""
    return DetectionCandidate(
        plate_text=_as_text(_first(item, PLATE_KEYS)),
        color_text=_as_text(_first(item, COLOR_KEYS)),
        type_text=_as_text(_first(item, TYPE_KEYS)),
        confidence_raw=_as_number(_first(item, CONFIDENCE_KEYS)),
        timestamp_text=_as_text(_first(item, TIMESTAMP_KEYS)),
        camera_metadata=_as_text(_first(item, METADATA_KEYS)),
    )


def _first(mapping: Dict[str, Any], keys: Sequence[str]) -> Any:
    for key in keys:
        value = mapping.get(key)
        if value is not None and value != "":
            return value
    return None


def _as_text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return str(int(value)) if value.is_integer() else str(value)
    return None


def _as_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip().rstrip("%").strip()
        try:
            value = float(value)
        except ValueError:
            return None
    if not isinstance(value, (int, float)):
        return None
    number = float(value)
    return number if math.isfinite(number) else None


# Fallback extraction

SEGMENT_SPLIT_RE = re.compile(r"[,;|]")
TOKEN_RE = re.compile(r"[A-Za-z0-9]+(?:[-•·.][A-Za-z0-9]+)*")
COLOR_KEYWORD_RE = re.compile(r"colou?r", re.IGNORECASE)
TYPE_KEYWORD_RE = re.compile(r"type", re.IGNORECASE)
PLATE_KEYWORD_RE = re.compile(r"plate", re.IGNORECASE)

# Label words that sit between "plate" and the plate itself
PLATE_LABEL_WORDS = frozenset({
    "number", "num", "no", "nr", "id", "text", "is", "reads", "read",
    "license", "licence", "the", "of", "value",
})

# How many tokens after the keyword still count as "near"
PLATE_TOKEN_WINDOW = 4


def _phrase_re(words) -> "re.Pattern":
    # Longest phrases first so "dark blue" wins over "blue"
    alternatives = sorted(words, key=len, reverse=True)
    return re.compile(
        r"\b(" + "|".join(re.escape(w) for w in alternatives) + r")\b",
        re.IGNORECASE,
    )


COLOR_PHRASE_RE = _phrase_re(COLOR_WORDS)
TYPE_PHRASE_RE = _phrase_re(TYPE_WORDS)


def extract_from_prose(text: str) -> List[DetectionCandidate]:
    """
    Best-effort extraction from non-JSON text.

    Each line is split into segments; a segment mentioning "plate"
    contributes the nearest digit-bearing token, one mentioning "color"
    a recognized color phrase, one mentioning "type" a recognized vehicle
    type. Values are then zipped positionally, one candidate per plate.
    """
    plates: List[str] = []
    colors: List[str] = []
    types: List[str] = []

    for line in text.splitlines():
        for segment in SEGMENT_SPLIT_RE.split(line):
            plate = _plate_near_keyword(segment)
            if plate:
                plates.append(plate)
                continue
            color = _phrase_after(segment, COLOR_KEYWORD_RE, COLOR_PHRASE_RE)
            if color:
                colors.append(color)
                continue
            vehicle_type = _phrase_after(segment, TYPE_KEYWORD_RE, TYPE_PHRASE_RE)
            if vehicle_type:
                types.append(vehicle_type)

    return [
        DetectionCandidate(
            plate_text=plate,
            color_text=colors[i] if i < len(colors) else None,
            type_text=types[i] if i < len(types) else None,
        )
        for i, plate in enumerate(plates)
    ]


def _plate_near_keyword(segment: str) -> Optional[str]:
    keyword = PLATE_KEYWORD_RE.search(segment)
    if not keyword:
        return None

    remainder = segment[keyword.end():]
    tokens: List[Tuple[str, int, int]] = [
        (m.group(0), m.start(), m.end())
        for m in TOKEN_RE.finditer(remainder)
        if m.group(0).lower() not in PLATE_LABEL_WORDS
    ][:PLATE_TOKEN_WINDOW]

    for i, (token, _, end) in enumerate(tokens):
        if any(ch.isdigit() for ch in token):
            return token
        # Letter group followed by a digit group, e.g. "ABC 1234"
        if token.isalpha() and len(token) <= 4 and i + 1 < len(tokens):
            nxt, nxt_start, _ = tokens[i + 1]
            gap = remainder[end:nxt_start]
            if gap.strip() == "" and any(ch.isdigit() for ch in nxt):
                return f"{token} {nxt}"
    return None


def _phrase_after(segment: str, keyword_re: "re.Pattern", phrase_re: "re.Pattern") -> Optional[str]:
    keyword = keyword_re.search(segment)
    if not keyword:
        return None
    match = phrase_re.search(segment, keyword.end())
    return match.group(1) if match else None

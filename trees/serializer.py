import json

from logger import logger

EMPTY_ARRAY = "[]"
EMPTY_QUERY_ALL = '{"points":[],"rects":[]}'


class SerializationError(RuntimeError):
    """El resultado de una consulta no se pudo codificar como JSON."""


def _dumps(payload):
    return json.dumps(payload, separators=(",", ":"))


def _encode(payload, fallback, strict):
    try:
        return _dumps(payload)
    except (TypeError, ValueError) as e:
        if strict:
            raise SerializationError(f"No se pudo serializar el resultado: {e}") from e
        logger.error("Serialización fallida, se devuelve %s: %s", fallback, e)
        return fallback


def points_to_json(points, strict=False):
    """Serializa una secuencia de Point como arreglo de registros {"x", "y"}.

    Si la codificación falla devuelve "[]", igual que un resultado vacío;
    con strict=True lanza SerializationError para poder distinguir ambos casos.
    """
    return _encode([p.to_dict() for p in points], EMPTY_ARRAY, strict)


def rects_to_json(rects, strict=False):
    """Serializa rectángulos como registros {"center": {...}, "width", "height"}."""
    return _encode([r.to_dict() for r in rects], EMPTY_ARRAY, strict)


def query_all_to_json(points, rects, strict=False):
    payload = {
        "points": [p.to_dict() for p in points],
        "rects": [r.to_dict() for r in rects],
    }
    return _encode(payload, EMPTY_QUERY_ALL, strict)

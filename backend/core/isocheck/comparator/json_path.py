# comparator/json_path.py
"""
Resolución de rutas con notación de punto sobre árboles JSON.
"""

import json
import re
from typing import Any, Optional

MISSING = object()

_INDEXED_SEGMENT = re.compile(r"^(?P<name>[^\[\]]*)\[(?P<index>\d+)\]$")


class JsonPathResolver:
    """
    Resuelve rutas del tipo "a.b[0].c".

    Cada segmento se busca primero por coincidencia exacta y luego sin
    distinguir mayúsculas. Un segmento no encontrado produce ausencia
    (None), nunca una excepción. Un null JSON se resuelve como "".
    """

    def resolve(self, root: Any, path: str) -> Optional[str]:
        node = self.resolve_node(root, path)
        if node is MISSING:
            return None
        return self.to_text(node)

    def resolve_node(self, root: Any, path: str) -> Any:
        """Devuelve el nodo en la ruta o MISSING."""
        if path is None:
            return MISSING

        current = root
        for raw_segment in path.strip().split("."):
            segment = raw_segment.strip()
            index = None

            match = _INDEXED_SEGMENT.match(segment)
            if match:
                segment = match.group("name")
                index = int(match.group("index"))

            if segment:
                current = self._child(current, segment)
                if current is MISSING:
                    return MISSING

            if index is not None:
                if not isinstance(current, list) or index >= len(current):
                    return MISSING
                current = current[index]

        return current

    @staticmethod
    def _child(node: Any, key: str) -> Any:
        if not isinstance(node, dict):
            return MISSING
        if key in node:
            return node[key]
        lowered = key.lower()
        for candidate, value in node.items():
            if candidate.lower() == lowered:
                return value
        return MISSING

    @staticmethod
    def to_text(node: Any) -> str:
        if node is None:
            return ""
        if isinstance(node, bool):
            return "true" if node else "false"
        if isinstance(node, (dict, list)):
            return json.dumps(node, separators=(",", ":"), ensure_ascii=False)
        return str(node).strip()

"""
docmerge — Canonical Error Payloads (v1)

Este módulo define o padrão canônico de payloads de erro do docmerge.
Toda falha de merge é reportada ao chamador como uma exceção tipada
(`docmerge.core.merge.errors`) que sabe se converter em um payload
serializável, adequado para relatórios e inspeção automatizada.

Erros são:

- explícitos
- serializáveis
- acionáveis

Nenhum fallback silencioso é permitido.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MergeErrorPayload:
    """
    Payload canônico de erro do docmerge.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

POLICY_CONFLICT = "POLICY_CONFLICT"
DOCUMENT_LOAD_ERROR = "DOCUMENT_LOAD_ERROR"
STRUCTURE_MISMATCH = "STRUCTURE_MISMATCH"
DUPLICATE_KEY = "DUPLICATE_KEY"
MERGE_ERROR = "MERGE_ERROR"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def merge_error(
    *,
    message: str,
    details: Dict[str, Any],
    hint: Optional[str] = None,
) -> MergeErrorPayload:
    return MergeErrorPayload(
        type=MERGE_ERROR,
        message=message,
        details=details,
        hint=hint,
    )


def policy_conflict(
    *,
    patterns: List[str],
    hint: str = "Remova o pattern de `overwrite_patterns` ou de `append_patterns`; um mesmo caminho não pode ter as duas políticas.",
) -> MergeErrorPayload:
    return MergeErrorPayload(
        type=POLICY_CONFLICT,
        message="Pattern declarado como overwrite e append simultaneamente",
        details={"patterns": patterns},
        hint=hint,
    )


def document_load_error(
    *,
    source: Optional[str],
    reason: str,
    hint: str = "Verifique se o documento existe sob o diretório base e se é um YAML/JSON válido com um mapa na raiz.",
) -> MergeErrorPayload:
    return MergeErrorPayload(
        type=DOCUMENT_LOAD_ERROR,
        message="Falha ao carregar documento",
        details={"source": source, "reason": reason},
        hint=hint,
    )


def structure_mismatch(
    *,
    context_path: str,
    src_kind: str,
    dst_kind: str,
    source: Optional[str] = None,
    hint: str = "A mesma chave deve ter o mesmo tipo estrutural (mapa, lista ou escalar) em todos os documentos.",
) -> MergeErrorPayload:
    return MergeErrorPayload(
        type=STRUCTURE_MISMATCH,
        message="Tipos estruturais incompatíveis para a mesma chave",
        details={
            "context_path": context_path,
            "src_kind": src_kind,
            "dst_kind": dst_kind,
            "source": source,
        },
        hint=hint,
    )


def duplicate_key(
    *,
    context_path: str,
    existing: Any,
    incoming: Any,
    source: Optional[str] = None,
    hint: str = "Declare o caminho em `overwrite_patterns` ou remova o valor duplicado de um dos documentos.",
) -> MergeErrorPayload:
    return MergeErrorPayload(
        type=DUPLICATE_KEY,
        message="Chave duplicada com valores diferentes (overwrite=false)",
        details={
            "context_path": context_path,
            "existing": existing,
            "incoming": incoming,
            "source": source,
        },
        hint=hint,
    )

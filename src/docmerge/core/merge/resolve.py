# src/docmerge/core/merge/resolve.py
"""
Resolução de caminhos relativos ao documento de origem.

Antes de um documento ser mesclado na raiz acumulada, strings em context
paths que casam com `resolve_path_patterns` são reescritas como
`join(diretório_do_documento, valor)`, para que continuem válidas no
documento combinado.

Política de reescrita (v1):
    - string em caminho que casa → reescrita
    - escalar não-string → inalterado
    - mapa → recursão in-place com path estendido
    - lista → elementos compartilham o path da chave; a lista só é
      substituída se **todos** os elementos foram reescritos
      (tudo-ou-nada); caso contrário permanece intacta

Invariantes:
    - Executa uma única vez por documento, com o diretório do próprio
      documento, antes do merge
    - O documento é mutado in-place; nenhuma cópia é produzida
    - Documentos na raiz do diretório base (diretório vazio) não são
      reescritos

Limites explícitos:
    - Não verifica existência dos arquivos referenciados
    - Não reescreve valores já mesclados na raiz acumulada
"""

from __future__ import annotations

import posixpath
from typing import Any, Dict, Optional, Tuple

from ..context import MergeContext
from .policy import MergePolicy
from .tree import NodeKind, ROOT_PATH, child_path, node_kind


STAGE = "resolve"


def join_source_path(source_dir: str, value: str) -> str:
    """
    Junta o diretório do documento de origem a um caminho relativo.

    O resultado é normalizado em estilo POSIX (`./a/../b` → `b`). Um valor
    iniciado por `/` também é tratado como relativo ao diretório de origem.
    """
    return posixpath.normpath(f"{source_dir}/{value}")


def resolve_paths(
    document: Dict[str, Any],
    source_dir: str,
    policy: MergePolicy,
    context: Optional[MergeContext] = None,
) -> Dict[str, Any]:
    """
    Reescreve in-place as strings do documento em caminhos de resolução.

    Args:
        document: árvore recém-carregada (mapa na raiz).
        source_dir: diretório do documento de origem, relativo ao
            diretório base.
        policy: política da operação de merge.
        context: contexto opcional para registro de eventos.

    Returns:
        Dict[str, Any]: o mesmo objeto `document`, já reescrito.
    """
    if not source_dir:
        return document
    _resolve_mapping(document, source_dir, policy, context, ROOT_PATH)
    return document


def _resolve_mapping(
    mapping: Dict[str, Any],
    source_dir: str,
    policy: MergePolicy,
    context: Optional[MergeContext],
    context_path: str,
) -> None:
    for key, value in mapping.items():
        updated, new_value = _resolve_value(
            value, source_dir, policy, context, child_path(context_path, key)
        )
        if updated:
            mapping[key] = new_value


def _resolve_value(
    value: Any,
    source_dir: str,
    policy: MergePolicy,
    context: Optional[MergeContext],
    context_path: str,
) -> Tuple[bool, Any]:
    kind = node_kind(value)

    if kind is NodeKind.SEQUENCE:
        if not value:
            return False, None
        rewritten = []
        for item in value:
            updated, new_item = _resolve_value(
                item, source_dir, policy, context, context_path
            )
            if updated:
                rewritten.append(new_item)
        if len(rewritten) == len(value):
            return True, rewritten
        if rewritten and context is not None:
            context.add_warning(
                stage=STAGE,
                message=(
                    f"sequence[{context_path}] left unresolved: "
                    f"{len(rewritten)} of {len(value)} items are path strings"
                ),
            )
        return False, None

    if kind is NodeKind.MAPPING:
        _resolve_mapping(value, source_dir, policy, context, context_path)
        return False, None

    if isinstance(value, str) and policy.resolve_path(context_path):
        resolved = join_source_path(source_dir, value)
        if context is not None:
            context.log(
                stage=STAGE,
                level="INFO",
                message=f"Update[{context_path}] {value} -> {resolved}",
                path=context_path,
                before=value,
                after=resolved,
            )
        return True, resolved

    return False, None

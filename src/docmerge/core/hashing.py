# src/docmerge/core/hashing.py
"""
Hashing canônico de documentos mesclados.

O hash representa a **identidade estrutural** do documento final e é
registrado no evento `merge completed` do MergeContext, permitindo
comparar resultados de execuções diferentes.

Documentos YAML podem ter chaves que não são strings (datas, inteiros,
booleanos YAML 1.1 como `on:`), misturadas com chaves string no mesmo mapa.
Antes da serialização, a árvore é reduzida a uma forma canônica:

    - chave string      → mantida
    - chave não-string  → `!<tipo> <valor>` (ex.: `!date 2024-01-01`)
    - valor não-JSON    → `str(valor)`

Invariantes:
    - Documentos estruturalmente equivalentes produzem o mesmo hash
    - Independe da ordem original das chaves
    - `1`, `True` e `"1"` como chaves produzem formas canônicas distintas
"""


import json
import hashlib
from typing import Any, Dict


def canonical_key(key: Any) -> str:
    if isinstance(key, str):
        return key
    return f"!{type(key).__name__} {key}"


def canonical_form(value: Any) -> Any:
    if isinstance(value, dict):
        return {canonical_key(k): canonical_form(v) for k, v in value.items()}
    if isinstance(value, list):
        return [canonical_form(v) for v in value]
    return value


def compute_document_hash(document: Dict[str, Any]) -> str:
    """
    Gera um hash determinístico de um documento.

    Args:
        document (Dict[str, Any]): Documento (mapa na raiz), com chaves de
            qualquer tipo escalar produzido pelo parser.

    Returns:
        str: Hash SHA-256 hexadecimal de 64 caracteres.

    Raises:
        TypeError: Se o objeto fornecido não for um dicionário.
    """

    if not isinstance(document, dict):
        raise TypeError(
            f"Documento para hashing deve ser dict, recebido: {type(document).__name__}"
        )

    canonical_json = json.dumps(
        canonical_form(document),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )

    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()

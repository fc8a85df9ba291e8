# src/docmerge/core/merge/merger.py
"""
Merge recursivo de documentos orientado por política.

Este módulo implementa o merger canônico do docmerge: combina um
documento de entrada (`src`) no documento acumulado (`dst`), chave a
chave, decidindo por caminho entre união, concatenação, substituição ou
rejeição.

Política de merge por tipo de `src[key]` (v1):
    - lista, chave ausente        → inserida como está
    - lista + lista               → append: dst ++ src; overwrite: src
    - lista + não-lista           → erro estrutural
    - mapa, chave ausente         → mapa vazio + merge recursivo
    - mapa + mapa                 → merge recursivo
    - mapa + não-mapa             → erro estrutural
    - escalar, chave ausente      → inserido
    - escalar igual               → no-op
    - escalar diferente           → append: erro de chave duplicada;
                                    overwrite: substituído

A política é consultada com o context path da própria chave.

Invariantes:
    - `dst` é mutado in-place
    - O merge não é transacional: após um erro, `dst` deve ser descartado
    - Documentos são processados estritamente na ordem fornecida

Limites explícitos:
    - Não carrega nem reescreve documentos
    - Não realiza merge de listas por identidade de elemento
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..context import MergeContext
from .errors import DuplicateKeyError, StructureMismatchError
from .policy import MergePolicy
from .tree import NodeKind, ROOT_PATH, child_path, node_kind, scalars_equal


STAGE = "merge"


class DocumentMerger:
    """
    Merger de documentos com estado acumulado.

    O único estado mutável é `root`: o primeiro documento acumulado se
    torna a raiz sem passar por merge, e os seguintes são mesclados nela.
    """

    def __init__(
        self,
        policy: MergePolicy,
        context: Optional[MergeContext] = None,
    ) -> None:
        self.policy = policy
        self.context = context
        self.root: Optional[Dict[str, Any]] = None

    def accumulate(self, document: Dict[str, Any]) -> Dict[str, Any]:
        if self.root is None:
            self.root = document
        else:
            self.merge(self.root, document, ROOT_PATH)
        return self.root

    def merge(
        self,
        dst: Dict[str, Any],
        src: Dict[str, Any],
        context_path: str = ROOT_PATH,
    ) -> None:
        """
        Mescla as chaves de `src` em `dst`, recursivamente.

        Args:
            dst: mapa acumulado (mutado in-place).
            src: mapa de entrada.
            context_path: path de `dst` na raiz acumulada.

        Raises:
            StructureMismatchError: se uma chave tem tipos estruturais
                incompatíveis entre `dst` e `src`.
            DuplicateKeyError: se um escalar se repete com valor diferente
                sob política append.
        """
        for key, src_value in src.items():
            path = child_path(context_path, key)
            kind = node_kind(src_value)

            if kind is NodeKind.SEQUENCE:
                self._merge_sequence(dst, key, src_value, path)
            elif kind is NodeKind.MAPPING:
                self._merge_mapping(dst, key, src_value, path)
            else:
                self._merge_scalar(dst, key, src_value, path)

    def _merge_sequence(self, dst: Dict[str, Any], key: Any, src_value: list, path: str) -> None:
        if key not in dst:
            dst[key] = src_value
            return

        dst_value = dst[key]
        if node_kind(dst_value) is not NodeKind.SEQUENCE:
            raise StructureMismatchError(
                path, NodeKind.SEQUENCE.value, node_kind(dst_value).value
            )

        if self.policy.is_overwrite(path):
            dst[key] = src_value
            self._log(f"Overwrite[{path}] sequence", path=path)
        else:
            dst[key] = dst_value + src_value
            self._log(f"Append[{path}] +{len(src_value)} items", path=path)

    def _merge_mapping(self, dst: Dict[str, Any], key: Any, src_value: dict, path: str) -> None:
        if key not in dst:
            dst[key] = {}
        dst_value = dst[key]

        if node_kind(dst_value) is not NodeKind.MAPPING:
            raise StructureMismatchError(
                path, NodeKind.MAPPING.value, node_kind(dst_value).value
            )
        self.merge(dst_value, src_value, path)

    def _merge_scalar(self, dst: Dict[str, Any], key: Any, src_value: Any, path: str) -> None:
        if key not in dst:
            dst[key] = src_value
            return

        dst_value = dst[key]
        if scalars_equal(dst_value, src_value):
            return
        if not self.policy.is_overwrite(path):
            raise DuplicateKeyError(path, dst_value, src_value)

        dst[key] = src_value
        self._log(f"Overwrite[{path}] {dst_value!r} -> {src_value!r}", path=path)

    def _log(self, message: str, **extra: Any) -> None:
        if self.context is not None:
            self.context.log(stage=STAGE, level="DEBUG", message=message, **extra)

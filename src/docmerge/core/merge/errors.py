# src/docmerge/core/merge/errors.py
"""
Exceções canônicas da camada de merge do docmerge.

Este módulo define a hierarquia oficial de exceções utilizadas durante
a construção da política, o carregamento de documentos e o merge
recursivo.

As exceções aqui definidas representam **violações explícitas** da
entrada (documentos ou configuração), e não erros genéricos de execução.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Todo erro aborta a operação de merge inteira
    - Mensagens identificam o documento e o context path envolvidos

Invariantes:
    - Todas as exceções de merge herdam de `MergeError`
    - Todas as exceções de opções herdam de `OptionsError`
    - Toda `MergeError` sabe se converter em `MergeErrorPayload`

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não decide políticas de merge
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from .. import errors as payloads


class MergeError(Exception):
    """
    Exceção base para erros ocorridos durante uma operação de merge.

    Carrega uma mensagem curta, detalhes estruturados e, quando o erro
    ocorre durante o processamento de um documento, o identificador
    desse documento (`source`), preenchido pelo pipeline.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[Dict[str, Any]] = None,
        source: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = dict(details or {})
        self.source = source

    @property
    def context_path(self) -> Optional[str]:
        return self.details.get("context_path")

    def __str__(self) -> str:
        if self.source is None:
            return self.message
        return f"document[{self.source}]: {self.message}"

    def to_payload(self) -> payloads.MergeErrorPayload:
        return payloads.merge_error(
            message=self.message,
            details={**self.details, "source": self.source},
        )


class PolicyConflictError(MergeError):
    """
    Exceção levantada quando o mesmo pattern normalizado é declarado
    como overwrite e como append.

    Detectada na construção da política, antes de qualquer documento
    ser lido.
    """

    def __init__(self, pattern: str) -> None:
        super().__init__(
            f"config contains conflicting policies for pattern '{pattern}'",
            details={"pattern": pattern},
        )
        self.pattern = pattern

    def to_payload(self) -> payloads.MergeErrorPayload:
        return payloads.policy_conflict(patterns=[self.pattern])


class DocumentLoadError(MergeError):
    """
    Exceção levantada quando um documento não pode ser lido ou parseado.

    A exceção original (I/O ou parse) é preservada em `__cause__`.
    """

    def __init__(self, reason: str, *, source: Optional[str] = None) -> None:
        super().__init__(
            f"error loading document: {reason}",
            details={"reason": reason},
            source=source,
        )

    def to_payload(self) -> payloads.MergeErrorPayload:
        return payloads.document_load_error(
            source=self.source, reason=self.details["reason"]
        )


class InvalidDocumentRootError(DocumentLoadError):
    """
    Exceção levantada quando a raiz de um documento não é um mapa.

    Listas ou escalares na raiz não podem ser mesclados por chave.
    """


class StructureMismatchError(MergeError):
    """
    Exceção levantada quando uma mesma chave possui tipos estruturais
    incompatíveis entre o documento acumulado e o documento de entrada.

    Exemplo de conflito:
        - dst: {"a": [1]}
        - src: {"a": {"b": 1}}

    Levantada independentemente da política de overwrite.
    """

    def __init__(self, context_path: str, src_kind: str, dst_kind: str) -> None:
        super().__init__(
            f"key[{context_path}] mismatch: src({src_kind}) vs dst({dst_kind})",
            details={
                "context_path": context_path,
                "src_kind": src_kind,
                "dst_kind": dst_kind,
            },
        )

    def to_payload(self) -> payloads.MergeErrorPayload:
        return payloads.structure_mismatch(
            context_path=self.details["context_path"],
            src_kind=self.details["src_kind"],
            dst_kind=self.details["dst_kind"],
            source=self.source,
        )


class DuplicateKeyError(MergeError):
    """
    Exceção levantada quando um escalar se repete com valor diferente
    em um caminho cuja política não é overwrite.
    """

    def __init__(self, context_path: str, existing: Any, incoming: Any) -> None:
        super().__init__(
            f"duplicate key (overwrite=false): {context_path}",
            details={
                "context_path": context_path,
                "existing": existing,
                "incoming": incoming,
            },
        )

    def to_payload(self) -> payloads.MergeErrorPayload:
        return payloads.duplicate_key(
            context_path=self.details["context_path"],
            existing=self.details["existing"],
            incoming=self.details["incoming"],
            source=self.source,
        )


# ---------------------------------------------------------------------------
# Opções de merge
# ---------------------------------------------------------------------------

class OptionsError(Exception):
    """
    Exceção base para erros no carregamento das opções de merge.

    Limites explícitos:
        - Não representa erro de documento nem de merge
    """


class OptionsNotFoundError(OptionsError):
    """Arquivo de opções não encontrado no caminho especificado."""


class UnsupportedFormatError(OptionsError):
    """
    Formato do arquivo de opções não suportado.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidOptionsError(OptionsError):
    """Conteúdo do arquivo de opções estruturalmente inválido."""

# src/docmerge/core/merge/documents.py
"""
Pipeline de merge de documentos e seus colaboradores.

Para cada documento, na ordem fornecida pelo chamador:

    load → parse → resolve paths (diretório do próprio documento) → merge

O primeiro documento se torna a raiz acumulada; os seguintes são
mesclados nela. A raiz final é devolvida ao chamador (`merge_documents`)
ou serializada (`merge_files`).

Colaboradores (contratos mínimos):
    - DocumentLoader: identificador → bytes + diretório do identificador
    - DocumentParser: bytes → árvore (mapa na raiz)
    - DocumentSerializer: árvore → bytes

Implementações default: leitura de arquivos sob um diretório base,
parse e serialização YAML (PyYAML; JSON é aceito por ser subconjunto de
YAML).

Invariantes:
    - A política é construída antes de qualquer documento ser lido
    - Todo erro aborta a operação; nenhum resultado parcial é devolvido
    - Erros identificam o documento que falhou (`MergeError.source`)
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, runtime_checkable

import yaml  # PyYAML

from ..context import MergeContext
from ..hashing import compute_document_hash
from .errors import DocumentLoadError, InvalidDocumentRootError, MergeError
from .merger import DocumentMerger
from .options import MergeOptions
from .policy import MergePolicy
from .resolve import resolve_paths
from .tree import unalias


STAGE = "document"


@dataclass(frozen=True)
class LoadedDocument:
    """Bytes brutos de um documento e o diretório do seu identificador."""

    data: bytes
    directory: str


@runtime_checkable
class DocumentLoader(Protocol):
    def load(self, source: str) -> LoadedDocument:
        ...


@runtime_checkable
class DocumentParser(Protocol):
    def parse(self, data: bytes) -> Dict[str, Any]:
        ...


@runtime_checkable
class DocumentSerializer(Protocol):
    def dump(self, document: Dict[str, Any]) -> bytes:
        ...


class FileDocumentLoader:
    """
    Carrega documentos do filesystem, relativos a um diretório base.

    O diretório reportado é o do identificador (`common/a.yaml` →
    `common`), não o do diretório base: é contra ele que os caminhos do
    documento são resolvidos.
    """

    def __init__(self, base_directory: str = "") -> None:
        self.base_directory = base_directory

    def load(self, source: str) -> LoadedDocument:
        path = Path(self.base_directory) / source if self.base_directory else Path(source)
        return LoadedDocument(
            data=path.read_bytes(),
            directory=posixpath.dirname(source),
        )


class YamlDocumentParser:
    def parse(self, data: bytes) -> Dict[str, Any]:
        document = yaml.safe_load(data)
        if document is None:
            return {}
        if not isinstance(document, dict):
            raise InvalidDocumentRootError(
                f"document root must be a mapping, got {type(document).__name__}"
            )
        try:
            return unalias(document)
        except ValueError as exc:
            raise DocumentLoadError(str(exc)) from exc


class YamlDocumentSerializer:
    def dump(self, document: Dict[str, Any]) -> bytes:
        text = yaml.safe_dump(
            document,
            sort_keys=True,
            allow_unicode=True,
            default_flow_style=False,
        )
        return text.encode("utf-8")


def merge_documents(
    options: Optional[MergeOptions],
    *sources: str,
    loader: Optional[DocumentLoader] = None,
    parser: Optional[DocumentParser] = None,
    context: Optional[MergeContext] = None,
) -> Dict[str, Any]:
    """
    Mescla os documentos fornecidos em um único documento.

    Args:
        options: opções de merge (`None` equivale às opções default).
        *sources: identificadores dos documentos, na ordem de merge.
        loader: carregador de documentos (default: `FileDocumentLoader`
            sob `options.source_base_directory`).
        parser: parser de documentos (default: `YamlDocumentParser`).
        context: contexto para eventos e warnings (criado se ausente).

    Returns:
        Dict[str, Any]: documento mesclado. Vazio se não houver documentos.

    Raises:
        PolicyConflictError: patterns conflitantes, antes de qualquer leitura.
        DocumentLoadError: documento ilegível, inválido ou sem mapa na raiz.
        StructureMismatchError: tipos estruturais incompatíveis.
        DuplicateKeyError: escalar duplicado sob política append.
    """
    if options is None:
        options = MergeOptions()
    if context is None:
        context = MergeContext.new()

    policy = MergePolicy.from_options(options)
    loader = loader or FileDocumentLoader(options.source_base_directory)
    parser = parser or YamlDocumentParser()
    merger = DocumentMerger(policy, context)

    for source in sources:
        try:
            document, directory = _load(loader, parser, source)
            context.log(stage=STAGE, level="INFO", message=f"loaded {source}",
                        source=source, directory=directory)
            resolve_paths(document, directory, policy, context)
            merger.accumulate(document)
        except MergeError as exc:
            if exc.source is None:
                exc.source = source
            context.log(stage=STAGE, level="ERROR", message=str(exc), source=source)
            raise
        context.log(stage=STAGE, level="INFO", message=f"merged {source}", source=source)

    root = merger.root if merger.root is not None else {}
    context.log(
        stage=STAGE,
        level="INFO",
        message="merge completed",
        documents=len(sources),
        document_hash=compute_document_hash(root),
    )
    return root


def merge_files(
    options: Optional[MergeOptions],
    *sources: str,
    loader: Optional[DocumentLoader] = None,
    parser: Optional[DocumentParser] = None,
    serializer: Optional[DocumentSerializer] = None,
    context: Optional[MergeContext] = None,
) -> bytes:
    """Mescla os documentos e serializa o resultado (YAML por default)."""
    merged = merge_documents(
        options, *sources, loader=loader, parser=parser, context=context
    )
    serializer = serializer or YamlDocumentSerializer()
    return serializer.dump(merged)


def _load(loader: DocumentLoader, parser: DocumentParser, source: str):
    try:
        loaded = loader.load(source)
    except OSError as exc:
        raise DocumentLoadError(str(exc), source=source) from exc
    try:
        document = parser.parse(loaded.data)
    except yaml.YAMLError as exc:
        raise DocumentLoadError(f"error reading yaml: {exc}", source=source) from exc
    return document, loaded.directory

# src/docmerge/core/merge/__init__.py
"""
Camada de merge do docmerge.

Este pacote reúne os componentes que combinam vários documentos
hierárquicos (mapas, listas e escalares) em um único documento, sob uma
política declarativa orientada por context paths.

Componentes:
    - tree      → classificação estrutural de nós e context paths
    - policy    → compilação e consulta de patterns (overwrite/append/resolve)
    - resolve   → reescrita de caminhos relativos ao documento de origem
    - merger    → merge recursivo com política por chave
    - options   → opções de merge e seu loader (YAML/JSON)
    - documents → colaboradores (loader/parser/serializer) e pipeline

Invariantes:
    - Documentos são processados estritamente na ordem fornecida
    - Conflitos de configuração são detectados antes de qualquer leitura
    - O primeiro erro aborta a operação inteira
"""

from .documents import (
    DocumentLoader,
    DocumentParser,
    DocumentSerializer,
    FileDocumentLoader,
    LoadedDocument,
    YamlDocumentParser,
    YamlDocumentSerializer,
    merge_documents,
    merge_files,
)
from .errors import (
    DocumentLoadError,
    DuplicateKeyError,
    InvalidDocumentRootError,
    InvalidOptionsError,
    MergeError,
    OptionsError,
    OptionsNotFoundError,
    PolicyConflictError,
    StructureMismatchError,
    UnsupportedFormatError,
)
from .merger import DocumentMerger
from .options import MergeOptions, load_options
from .policy import MergePolicy, PolicyEntry, PolicySet, normalize_pattern
from .resolve import join_source_path, resolve_paths
from .tree import NodeKind, ROOT_PATH, child_path, node_kind, unalias

__all__ = [
    "DocumentLoader",
    "DocumentParser",
    "DocumentSerializer",
    "FileDocumentLoader",
    "LoadedDocument",
    "YamlDocumentParser",
    "YamlDocumentSerializer",
    "merge_documents",
    "merge_files",
    "DocumentLoadError",
    "DuplicateKeyError",
    "InvalidDocumentRootError",
    "InvalidOptionsError",
    "MergeError",
    "OptionsError",
    "OptionsNotFoundError",
    "PolicyConflictError",
    "StructureMismatchError",
    "UnsupportedFormatError",
    "DocumentMerger",
    "MergeOptions",
    "load_options",
    "MergePolicy",
    "PolicyEntry",
    "PolicySet",
    "normalize_pattern",
    "join_source_path",
    "resolve_paths",
    "NodeKind",
    "ROOT_PATH",
    "child_path",
    "node_kind",
    "unalias",
]

# src/docmerge/core/__init__.py
"""
Core do docmerge.

Componentes principais:
    - merge     → política, resolução de caminhos, merger e pipeline
    - context   → MergeContext (eventos estruturados e warnings)
    - errors    → payloads canônicos de erro
    - hashing   → identidade estrutural do documento final

O core não depende de CLI nem de formatos de texto além do parser e do
serializer YAML default, que podem ser substituídos.
"""

"""Generation -- mutate the sources and drive the schema compiler.

This sub-package is the second half of the protogen pipeline. Given the
:class:`~protogen.models.Declaration` list produced by
:mod:`protogen.discovery`, it:

1. appends ``option go_package`` directives
   (:mod:`~protogen.generator.directives`),
2. runs ``protoc`` per output mode (:mod:`~protogen.generator.compiler`),
3. relocates and filters OpenAPI documents
   (:mod:`~protogen.generator.pipeline`, :mod:`~protogen.generator.documents`).

Typical usage::

    from protogen.generator import GenerationPipeline, inject_directives

    inject_directives(declarations)
    report = GenerationPipeline(config).run(declarations)
"""

from protogen.generator.compiler import Compiler
from protogen.generator.directives import inject_directive, inject_directives
from protogen.generator.documents import load_document, remove_without_title
from protogen.generator.pipeline import GenerationPipeline

__all__ = [
    "Compiler",
    "GenerationPipeline",
    "inject_directive",
    "inject_directives",
    "load_document",
    "remove_without_title",
]

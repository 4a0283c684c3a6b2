"""Source discovery -- find ``.proto`` groups and derive their declarations.

This sub-package is the first half of the protogen pipeline: turning a
directory tree into a list of :class:`~protogen.models.Declaration` objects
that the generator consumes.

Typical usage::

    from protogen.discovery import SourceScanner, build_declarations

    groups = SourceScanner().scan("/generator")
    declarations = build_declarations(groups)

Sub-modules:

* :mod:`~protogen.discovery.paths` -- package identity and base folder
  derivation from the ``proto`` sentinel directory.
* :mod:`~protogen.discovery.scanner` -- directory walk with vendor pruning.
* :mod:`~protogen.discovery.declarations` -- group to declaration mapping.
"""

from protogen.discovery.declarations import build_declaration, build_declarations
from protogen.discovery.paths import package_identity_for
from protogen.discovery.scanner import SourceScanner

__all__ = [
    "SourceScanner",
    "build_declaration",
    "build_declarations",
    "package_identity_for",
]

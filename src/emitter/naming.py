"""Render Go type expressions for descriptors."""

from __future__ import annotations

from typing import Callable

from gotypes import Kind, TypeDescriptor

from .errors import UnknownPackageError, UnnamedTypeError


def type_name(type_: TypeDescriptor, package_identifier: Callable[[str], str]) -> str:
    """
    Return Go source denoting `type_`.

    Args:
        type_: The type to name.
        package_identifier: Maps a package path to the identifier that prefixes
            its type names ("" for the home package). Raises for unknown paths.

    Raises:
        UnnamedTypeError: The type (or a type it is built from) has no name and
            no type-literal syntax that can be written out safely.
        UnknownPackageError: A named type comes from an unregistered package.
    """
    if type_.is_named:
        if not type_.package:
            return type_.name
        try:
            ident = package_identifier(type_.package)
        except UnknownPackageError as exc:
            raise UnknownPackageError(type_.package, type_) from exc
        if not ident:
            return type_.name
        return f"{ident}.{type_.name}"

    kind = type_.kind
    if kind == Kind.POINTER:
        return "*" + type_name(type_.elem, package_identifier)
    if kind == Kind.SLICE:
        return "[]" + type_name(type_.elem, package_identifier)
    if kind == Kind.ARRAY:
        return f"[{type_.length}]" + type_name(type_.elem, package_identifier)
    if kind == Kind.MAP:
        key = type_name(type_.key, package_identifier)
        return f"map[{key}]" + type_name(type_.elem, package_identifier)
    if kind == Kind.INTERFACE and not type_.methods:
        return "interface{}"
    # Anonymous structs and the rest have no name to refer to.
    raise UnnamedTypeError(type_)


__all__ = ["type_name"]

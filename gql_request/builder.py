"""
Request body construction for gql_request.

This module turns a query and its variables into the HTTP body of a GraphQL
request: a JSON string, or a multipart form when the variables carry files.
"""

from __future__ import annotations

import io
import json
import mimetypes
import os
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import aiohttp
from graphql.language import DocumentNode, print_ast

from .models import Variables

ExtractedFiles = List[Tuple[Any, List[str]]]


def _is_file(value: Any) -> bool:
    return isinstance(value, io.IOBase)


def extract_files(value: Any, path: str = "") -> Tuple[Any, ExtractedFiles]:
    """
    Replace every file object inside ``value`` with ``None``.

    Dicts, lists and tuples are walked recursively and copied; other values
    are returned as they are.

    Args:
        value: Value to scan, usually the variables mapping
        path: Dotted path of ``value`` inside the operation

    Returns:
        Tuple of the cleaned clone and ``(file, paths)`` entries in discovery
        order. A file object found at several paths is listed once.
    """
    files: ExtractedFiles = []

    def add(file: Any, file_path: str) -> None:
        for known, paths in files:
            if known is file:
                paths.append(file_path)
                return
        files.append((file, [file_path]))

    def walk(node: Any, node_path: str) -> Any:
        if _is_file(node):
            add(node, node_path)
            return None
        prefix = f"{node_path}." if node_path else ""
        if isinstance(node, Mapping):
            return {key: walk(item, f"{prefix}{key}") for key, item in node.items()}
        if isinstance(node, (list, tuple)):
            return [walk(item, f"{prefix}{index}") for index, item in enumerate(node)]
        return node

    return walk(value, path), files


def _file_name(file: Any, index: int) -> str:
    name = getattr(file, "name", None)
    if isinstance(name, str) and name:
        return os.path.basename(name)
    return f"file{index}"


def create_request_body(
    query: str, variables: Optional[Variables] = None
) -> Union[str, aiohttp.FormData]:
    """
    Build the body of a GraphQL POST request.

    The ``variables`` key is left out entirely when ``variables`` is None, so
    servers that tell an absent value from ``null`` see it as absent.

    Args:
        query: GraphQL query text
        variables: Optional variables mapping

    Returns:
        JSON string, or ``aiohttp.FormData`` when the variables contain files
    """
    body: Dict[str, Any] = {"query": query}
    if variables is None:
        return json.dumps(body)

    clean_variables, files = extract_files(variables, "variables")
    body["variables"] = clean_variables
    if not files:
        return json.dumps(body)

    # GraphQL multipart request: operations, map, then one part per file
    form = aiohttp.FormData()
    form.add_field("operations", json.dumps(body), content_type="application/json")
    form.add_field(
        "map",
        json.dumps({str(index): paths for index, (_, paths) in enumerate(files)}),
        content_type="application/json",
    )
    for index, (file, _) in enumerate(files):
        filename = _file_name(file, index)
        content_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"
        form.add_field(str(index), file, filename=filename, content_type=content_type)
    return form


def resolve_request_document(document: Union[str, DocumentNode]) -> str:
    """Return the query text of a string or a parsed ``DocumentNode``."""
    if isinstance(document, str):
        return document
    if isinstance(document, DocumentNode):
        return print_ast(document)
    raise TypeError(
        f"document must be a str or graphql DocumentNode, got {type(document).__name__}"
    )


def gql(chunks: Union[str, Sequence[str]], *values: Any) -> str:
    """
    Passthrough helper for editor and formatter tooling that looks for ``gql``.

    The document is not parsed. A single string is returned unchanged, a
    sequence of chunks is joined with ``values`` interleaved.

    Example:
        query = gql('''
            query GetUser($id: ID!) {
                user(id: $id) { name }
            }
        ''')
    """
    if isinstance(chunks, str):
        return chunks
    return "".join(
        f"{chunk}{values[index] if index < len(values) else ''}"
        for index, chunk in enumerate(chunks)
    )

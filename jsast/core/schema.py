"""
Load the AST message classes from the bundled .proto and decode payloads.

The schema is compiled at runtime with grpc_tools.protoc into a descriptor
set, so ast.proto stays the only definition shared with parser.js. Each
schema file gets its own descriptor pool; compiled pools are memoized per
path for the lifetime of the process.
"""

from __future__ import annotations

import functools
import logging
import tempfile
import threading
from pathlib import Path
from typing import Any, Dict, Union

from google.protobuf import descriptor_pb2, descriptor_pool, json_format, message_factory, text_format
from google.protobuf.message import DecodeError, Message
from grpc_tools import protoc

from .errors import AstDecodeError, AstSchemaError

logger = logging.getLogger(__name__)

AST_MESSAGE = "compiler.protobuf.AST"

# protoc runs in-process; compile one schema at a time
_compile_lock = threading.Lock()


@functools.lru_cache(maxsize=None)
def _compile_schema(schema_path: str) -> descriptor_pool.DescriptorPool:
    path = Path(schema_path)
    if not path.is_file():
        raise AstSchemaError(f"AST schema not found: {path}")

    with tempfile.TemporaryDirectory(prefix="jsast-schema-") as tmp:
        out = Path(tmp) / "schema.desc"
        rc = protoc.main([
            "grpc_tools.protoc",
            f"--proto_path={path.parent}",
            f"--descriptor_set_out={out}",
            "--include_imports",
            path.name,
        ])
        if rc != 0 or not out.exists():
            raise AstSchemaError(f"protoc failed to compile {path} (rc={rc})")
        fds = descriptor_pb2.FileDescriptorSet.FromString(out.read_bytes())

    pool = descriptor_pool.DescriptorPool()
    for file_proto in fds.file:
        pool.AddSerializedFile(file_proto.SerializeToString())
    logger.debug(f"Compiled AST schema {path} ({len(fds.file)} file(s))")
    return pool


def load_message_class(schema_path: Union[str, Path], message_name: str = AST_MESSAGE) -> type:
    """Return the generated message class for `message_name` in the schema."""
    with _compile_lock:
        pool = _compile_schema(str(Path(schema_path).resolve()))
    try:
        desc = pool.FindMessageTypeByName(message_name)
    except KeyError as ex:
        raise AstSchemaError(f"message {message_name} not defined in {schema_path}") from ex
    return message_factory.GetMessageClass(desc)


def decode_ast(data: bytes, schema_path: Union[str, Path]) -> Message:
    """Decode a serialized AST; raises AstDecodeError on malformed input."""
    cls = load_message_class(schema_path)
    try:
        return cls.FromString(data)
    except DecodeError as ex:
        raise AstDecodeError(f"invalid AST payload ({len(data)} bytes): {ex}") from ex


def ast_to_dict(ast: Message) -> Dict[str, Any]:
    return json_format.MessageToDict(ast, preserving_proto_field_name=True)


def ast_to_json(ast: Message, indent: int = 2) -> str:
    return json_format.MessageToJson(ast, preserving_proto_field_name=True, indent=indent)


def ast_to_text(ast: Message) -> str:
    return text_format.MessageToString(ast)

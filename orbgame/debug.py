"""Readable reports for graphics driver debug messages."""

from __future__ import annotations

import sys

GL_DEBUG_SOURCE_API = 0x8246
GL_DEBUG_SOURCE_WINDOW_SYSTEM = 0x8247
GL_DEBUG_SOURCE_SHADER_COMPILER = 0x8248
GL_DEBUG_SOURCE_THIRD_PARTY = 0x8249
GL_DEBUG_SOURCE_APPLICATION = 0x824A
GL_DEBUG_SOURCE_OTHER = 0x824B

GL_DEBUG_TYPE_ERROR = 0x824C
GL_DEBUG_TYPE_DEPRECATED_BEHAVIOR = 0x824D
GL_DEBUG_TYPE_UNDEFINED_BEHAVIOR = 0x824E
GL_DEBUG_TYPE_PORTABILITY = 0x824F
GL_DEBUG_TYPE_PERFORMANCE = 0x8250
GL_DEBUG_TYPE_OTHER = 0x8251
GL_DEBUG_TYPE_MARKER = 0x8268
GL_DEBUG_TYPE_PUSH_GROUP = 0x8269
GL_DEBUG_TYPE_POP_GROUP = 0x826A

GL_DEBUG_SEVERITY_HIGH = 0x9146
GL_DEBUG_SEVERITY_MEDIUM = 0x9147
GL_DEBUG_SEVERITY_LOW = 0x9148
GL_DEBUG_SEVERITY_NOTIFICATION = 0x826B

_RED = "\033[1;31m"
_RESET = "\033[0m"
_UNKNOWN = "Unknown"

_SOURCES = {
    GL_DEBUG_SOURCE_API: "API",
    GL_DEBUG_SOURCE_WINDOW_SYSTEM: "Window System",
    GL_DEBUG_SOURCE_SHADER_COMPILER: "Shader Compiler",
    GL_DEBUG_SOURCE_THIRD_PARTY: "Third Party",
    GL_DEBUG_SOURCE_APPLICATION: "Application",
    GL_DEBUG_SOURCE_OTHER: "Other",
}

_TYPES = {
    GL_DEBUG_TYPE_ERROR: "Error",
    GL_DEBUG_TYPE_DEPRECATED_BEHAVIOR: "Deprecated Behavior",
    GL_DEBUG_TYPE_UNDEFINED_BEHAVIOR: "Undefined Behavior",
    GL_DEBUG_TYPE_PORTABILITY: "Portability",
    GL_DEBUG_TYPE_PERFORMANCE: "Performance",
    GL_DEBUG_TYPE_MARKER: "Marker",
    GL_DEBUG_TYPE_PUSH_GROUP: "Push Group",
    GL_DEBUG_TYPE_POP_GROUP: "Pop Group",
    GL_DEBUG_TYPE_OTHER: "Other",
}

_SEVERITIES = {
    GL_DEBUG_SEVERITY_HIGH: "High",
    GL_DEBUG_SEVERITY_MEDIUM: "Medium",
    GL_DEBUG_SEVERITY_LOW: "Low",
    GL_DEBUG_SEVERITY_NOTIFICATION: "Notification",
}


def describe_source(source: int) -> str:
    return _SOURCES.get(source, _UNKNOWN)


def describe_type(kind: int) -> str:
    return _TYPES.get(kind, _UNKNOWN)


def describe_severity(severity: int) -> str:
    return _SEVERITIES.get(severity, _UNKNOWN)


def format_debug_message(source: int, kind: int, ident: int, severity: int, message: str) -> str:
    """Render a debug message; high-severity messages are wrapped in red."""
    text = (
        f"OpenGL Debug Message [{ident}]: {message}\n"
        f"Source: {describe_source(source)}\n"
        f"Type: {describe_type(kind)}\n"
        f"Severity: {describe_severity(severity)}\n"
        f"OpenGL Debug Message: {message}\n"
    )
    if severity == GL_DEBUG_SEVERITY_HIGH:
        return f"{_RED}{text}{_RESET}"
    return text


def debug_callback(
    source: int,
    kind: int,
    ident: int,
    severity: int,
    length: int,
    message: str | bytes,
    user_param: object,
) -> None:
    """Write a driver debug message to standard error."""
    if isinstance(message, (bytes, bytearray)):
        message = bytes(message).decode("utf-8", errors="replace")
    sys.stderr.write(format_debug_message(source, kind, ident, severity, message))
    sys.stderr.flush()
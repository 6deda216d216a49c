"""Centralized user-facing text for the staticecho CLI and server logs."""

from __future__ import annotations

class Styles:
    ERROR = "red"
    WARNING = "yellow"
    SUCCESS = "green"
    INFO = "dim"
    TABLE_HEADER = "bold magenta"


class Messages:
    APP_HELP = "staticecho – serve a folder of static files, with an optional chat echo endpoint."
    HELP_SERVE = "Serve static files from ROOT_FOLDER."
    HELP_CHAT = "Serve static files plus the POST /chat echo endpoint."
    HELP_INDEX = "Scan ROOT_FOLDER once and print the request paths it would serve."
    HELP_CONFIG = "Show or update the stored defaults in ~/.staticecho/config.json."
    HELP_ROOT = "Folder whose files are served (defaults to the configured root, ./public)."
    HELP_PORT = "Port to listen on; accepts -p9000 as well as -p 9000."
    HELP_HOST = "Interface to bind (empty string binds all interfaces)."
    HELP_REFRESH = "Minimum seconds between index rescans triggered by unknown paths."
    HELP_SHOW_CONFIG = "Show current configuration."
    HELP_SET_ROOT = "Set the default root folder."
    HELP_SET_PORT = "Set the default file server port."
    HELP_SET_CHAT_PORT = "Set the default port for the chat-enabled server."
    HELP_SET_HOST = "Set the default bind interface."
    HELP_SET_REFRESH = "Set the default refresh interval in seconds."
    HELP_RESET_CONFIG = "Restore every setting to its default."

    LOG_REQUEST = "{method} request for: {path}"
    LOG_SENDING = "Sending file: {path}"
    LOG_NOT_FOUND = "File not found: {path}"
    LOG_READ_ERROR = "Error reading file: {error}"
    LOG_SEND_ERROR = "Error sending response: {error}"
    LOG_REFRESHING = "Refreshing file list"
    LOG_INDEXED = "Indexed {count} file{plural} under {path}"
    LOG_WALK_ERROR = "Error reading files: {error}"
    LOG_CHAT = "User said: {text}"
    LOG_BAD_BODY = "Could not read request body: {error}"
    LOG_LISTENING = "Server listening at http://{host}:{port}"
    LOG_STOPPED = "Server stopped"

    ERROR_START = "Error starting server: {error}"
    ERROR_POSITIVE = "{name} must be greater than 0"
    ERROR_PORT_RANGE = "Port must be between 1 and 65535, got {value}"
    ERROR_CONFIG_INVALID = "Config file {path} is not valid JSON: {reason}"
    ERROR_CONFIG_VALUE = "Config file {path} holds an invalid value: {reason}"
    WARNING_ROOT_IGNORED = "{path} is not a directory; using {fallback} instead."
    WARNING_ROOT_MISSING = (
        "Root folder {path} is not a directory; serving an empty index until it appears."
    )

    INFO_NO_FILES = "No files found under {path}."
    INFO_CONFIG_SUMMARY = (
        "Root folder: {root}\n"
        "Host: {host}\n"
        "Port: {port}\n"
        "Chat port: {chat_port}\n"
        "Refresh interval: {refresh}s\n"
        "Cache max-age: {max_age}s"
    )
    INFO_ROOT_SET = "Default root folder set to {value}."
    INFO_PORT_SET = "Default port set to {value}."
    INFO_CHAT_PORT_SET = "Default chat port set to {value}."
    INFO_HOST_SET = "Default host set to {value}."
    INFO_REFRESH_SET = "Default refresh interval set to {value}s."
    INFO_CONFIG_RESET = "Configuration reset to defaults."
    INFO_CONFIG_UNCHANGED = "Nothing to update; pass --show to view the current settings."

    TABLE_TITLE = "Files served from {path}"
    TABLE_HEADER_REQUEST = "Request path"
    TABLE_HEADER_FILE = "File"
    TABLE_HEADER_TYPE = "Content-Type"

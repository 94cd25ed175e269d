from __future__ import annotations

COMMON_ERROR_MESSAGES: dict[int, str] = {
    100: "Unknown error",
    101: "Invalid parameter",
    102: "The requested API does not exist",
    103: "The requested method does not exist",
    104: "The requested version does not support the functionality",
    105: "The logged in session does not have permission",
    106: "Session timeout",
    107: "Session interrupted by duplicate login",
    119: "SID not found",
}

API_ERROR_MESSAGES: dict[str, dict[int, str]] = {
    "SYNO.API.Auth": {
        400: "No such account or incorrect password",
        401: "Account disabled",
        402: "Permission denied",
        403: "2-step verification code required",
        404: "Failed to authenticate 2-step verification code",
        406: "Enforce to authenticate with 2-factor authentication code",
        407: "Blocked IP source",
        408: "Expired password cannot change",
        409: "Expired password",
        410: "Password must be changed",
    },
    "SYNO.DownloadStation.Task": {
        400: "File upload failed",
        401: "Max number of tasks reached",
        402: "Destination denied",
        403: "Destination does not exist",
        404: "Invalid task id",
        405: "Invalid task action",
        406: "No default destination",
        407: "Set destination failed",
        408: "File does not exist",
    },
    "SYNO.DownloadStation2.Task": {
        400: "File upload failed",
        401: "Max number of tasks reached",
        402: "Destination denied",
        403: "Destination does not exist",
        406: "No default destination",
    },
}

_FILE_STATION_ERROR_MESSAGES: dict[int, str] = {
    400: "Invalid parameter of file operation",
    401: "Unknown error of file operation",
    402: "System is too busy",
    403: "Invalid user does this file operation",
    404: "Invalid group does this file operation",
    405: "Invalid user and group does this file operation",
    406: "Can't get user/group information from the account server",
    407: "Operation not permitted",
    408: "No such file or directory",
    409: "Non-supported file system",
    410: "Failed to connect internet-based file system",
    411: "Read-only file system",
    412: "Filename too long in the non-encrypted file system",
    413: "Filename too long in the encrypted file system",
    414: "File already exists",
    415: "Disk quota exceeded",
    416: "No space left on device",
    417: "Input/output error",
    418: "Illegal name or path",
    419: "Illegal file name",
    420: "Illegal file name on FAT file system",
    421: "Device or resource busy",
}

API_ERROR_MESSAGES["SYNO.FileStation.Info"] = _FILE_STATION_ERROR_MESSAGES
API_ERROR_MESSAGES["SYNO.FileStation.List"] = _FILE_STATION_ERROR_MESSAGES


def error_message_from_code(code: int, api_group: str | None = None) -> str:
    if code in COMMON_ERROR_MESSAGES:
        return COMMON_ERROR_MESSAGES[code]
    message = API_ERROR_MESSAGES.get(api_group or "", {}).get(code)
    if message:
        return message
    return f"Unknown error (code {code})"

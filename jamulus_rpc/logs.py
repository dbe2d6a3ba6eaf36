EMPTY_CALL: str = "Received empty remote procedure call data."
RPC_METHOD_CALL_START: str = "Calling the '%s' method with RPC ID #%s."
RPC_METHOD_CALL_END: str = "RPC ID #%s for method '%s' processed with result: %s."
RPC_NOTIFICATION_START: str = "Notification method '%s' received."
RPC_NOTIFICATION_END: str = "Notification method '%s' processed."
RPC_PARAMS: str = "Parameters for '%s': %s"
INVALID_JSON_RPC_VERSION: str = "Invalid JSON-RPC version! Expected '2.0', got '%s'."
INVALID_PARAMS: str = "Rejected parameters for '%s': %s"
METHOD_NOT_FOUND: str = "No handler registered for method '%s'."
LOG_FILE_OPENED: str = "Server event log opened at '%s'."
LOG_FILE_OPEN_FAILED: str = "Could not open server event log '%s': %s"
LOG_FILE_WRITE_FAILED: str = "Could not write to server event log: %s"

# flakes8: noqa: E501

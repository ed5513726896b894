class AppStatusCode:
    # success
    DATA_RETRIEVED_SUCCESSFULLY = "100"
    OPERATION_SUCCESSFUL = "101"
    CREATED_SUCCESSFULLY = "102"

    # failures
    OPERATION_FAILED = "200"
    OPERATION_ERROR = "201"
    INVALID_INPUT = "202"
    DUPLICATE_ADD_ERROR = "203"
    NOT_FOUND = "204"
    VALIDATION_ERROR = "205"
    SEQUENCE_EXHAUSTED = "206"

from .errors import classify_failure, error_json

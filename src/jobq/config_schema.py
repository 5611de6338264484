"""
JSON schemas for configuration validation.
"""

BROKER_SCHEMA = {
    "type": "object",
    "properties": {
        "backend": {"type": "string", "enum": ["memory", "redis"]},
        "redis_url": {"type": "string"},
        "socket_timeout": {"type": ["number", "null"], "exclusiveMinimum": 0},
    },
    "additionalProperties": False,
}

QUEUE_SCHEMA = {
    "type": "object",
    "properties": {
        "name": {"type": "string", "minLength": 1},
        "codec": {"type": "string", "enum": ["pickle", "json"]},
        "compress": {"type": "boolean"},
        "compression_level": {"type": "integer", "minimum": 0, "maximum": 9},
        "poll_interval": {"type": "number", "exclusiveMinimum": 0},
        "job_timeout": {"type": "integer", "minimum": 1},
        "ttl": {"type": "integer"},
        "result_ttl": {"type": "integer"},
        "failure_ttl": {"type": "integer"},
    },
    "additionalProperties": False,
}

WORKER_SCHEMA = {
    "type": "object",
    "properties": {
        "poll_interval": {"type": "number", "exclusiveMinimum": 0},
        "burst": {"type": "boolean"},
    },
    "additionalProperties": False,
}

LOGGING_SCHEMA = {
    "type": "object",
    "properties": {
        "level": {"type": "string", "enum": ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]},
        "format": {"type": "string", "enum": ["text", "json"]},
    },
    "additionalProperties": False,
}

CONFIG_SCHEMA = {
    "type": "object",
    "properties": {
        "broker": BROKER_SCHEMA,
        "queue": QUEUE_SCHEMA,
        "worker": WORKER_SCHEMA,
        "logging": LOGGING_SCHEMA,
    },
    "additionalProperties": False,
}

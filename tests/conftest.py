"""Shared pytest fixtures for promptslim tests."""

import json

import pytest


@pytest.fixture
def users_payload():
    """API response with 25 same-shaped users and some noisy keys."""
    return json.dumps(
        {
            "data": [
                {
                    "id": i,
                    "name": f"User {i}",
                    "status": ["active", "inactive", "pending"][i % 3],
                    "email": f"user{i}@example.com",
                }
                for i in range(25)
            ],
            "metadata": {"page": 1, "total": 25},
            "debugInfo": {"query_ms": 12},
            "__typename": "UserList",
        }
    )


@pytest.fixture
def node_error_log():
    """Node.js crash log with framework frames."""
    return "\n".join(
        [
            "2024-01-15T10:00:00.123Z INFO Server starting",
            "2024-01-15T10:00:01.456Z INFO Listening on port 3000",
            "TypeError: Cannot read properties of undefined (reading 'id')",
            "    at getUser (/app/src/users.js:42:15)",
            "    at handler (/app/src/routes.js:10:3)",
            "    at Layer.handle (/app/node_modules/express/lib/router/layer.js:95:5)",
            "    at next (/app/node_modules/express/lib/router/route.js:137:13)",
            "    at Module._compile (node:internal/modules/cjs/loader:1105:14)",
            "    at main (/app/src/index.js:5:1)",
        ]
    )


@pytest.fixture
def python_traceback_log():
    """Python traceback with a site-packages frame."""
    return "\n".join(
        [
            "[2024-01-15 10:00:00,000] INFO worker started",
            "Traceback (most recent call last):",
            '  File "/app/worker.py", line 12, in run',
            "    process(job)",
            '  File "/usr/lib/python3.12/site-packages/requests/api.py", line 59, in get',
            "    return request('get', url)",
            "ValueError: invalid job payload",
        ]
    )

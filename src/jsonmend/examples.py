"""Sample inputs shown by ``jsonmend demo``, one per repair rule."""

from typing import List, Tuple

EXAMPLES: List[Tuple[str, str]] = [
    ("Basic - Unquoted Keys", '{name: "John", age: 30}'),
    ("Basic - Single Quotes", "{'name': 'John', 'age': 30}"),
    ("Basic - Trailing Commas", '{"items": [1, 2, 3,], "total": 3,}'),
    ("Comments - Single Line", '{\n  "name": "John", // This is a comment\n  "age": 30\n}'),
    ("Comments - Multi Line", '{"name": "John", /* Multi-line comment */ "age": 30}'),
    ("Python - Constants", '{"active": True, "deleted": False, "value": None}'),
    (
        "MongoDB - Types",
        '{"id": ObjectId("507f1f77bcf86cd799439011"), "count": NumberLong("123")}',
    ),
    ("Truncated - Missing Bracket", '{"name": "John", "age": 30'),
    ("Truncated - Incomplete Value", '{"name": "John", "data":'),
    ("String Concatenation", '{"message": "Hello " + "World"}'),
    ("JSONP - Wrapper", 'callback({"success": true})'),
    ("Code Fence", '```json\n{"data": "value"}\n```'),
    ("Array - Ellipsis", "[1, 2, 3, ...]"),
    (
        "Complex - Nested",
        "{name: 'John', address: {city: 'NYC', zip: '10001'}, tags: [1, 2, 3,]}",
    ),
]

NDJSON_OUTPUT_FORMAT = """
## Output Format: NDJSON (Newline Delimited JSON)
**Important**: respond in NDJSON only.

- The output must consist of NDJSON data only. Never add text, comments or explanations.
- Remove all markdown syntax from the output (for example ```json, ```, #, **).
- Every line must contain exactly one complete JSON object.
- JSON objects are separated only by the newline character.
- Every JSON object must be parseable on its own.
- Never wrap the objects in an array or a parent object.
- Do not print the JSON schema; produce real data that conforms to it.
- Values that the schema does not allow must not be used.
- A line break inside a string value must be written as the escape sequence \\n, never as a literal newline.

Every line of your output must follow this JSON schema:
```json
{schema}
```
"""

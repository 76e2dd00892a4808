import requests
import json

# Manual smoke test against a local `uvicorn main:app --reload`.
# dry_run=1 does the Attio lookups but skips the PATCH.
payload = {
    "formId": "sample-form",
    "formName": "HDD evaluation",
    "submission": {"submissionId": "abc123"},
    "questions": [
        { "id": "6aYW", "name": "domain", "type": "ShortAnswer", "value": "acme.com" },
        { "id": "wrV6", "name": "HDD evaluation 1", "type": "LongAnswer", "value": "Strong technical team" },
        { "id": "6rxp", "name": "HDD evaluation 2", "type": "LongAnswer", "value": "Market still unproven" },
    ]
}

response = requests.post(
    "http://localhost:8000/webhook?dry_run=1",
    headers={"Content-Type": "application/json"},
    data=json.dumps(payload)
)

print("✅ Status:", response.status_code)
print("📦 Response:", response.json())

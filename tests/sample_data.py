"""Record file contents and identifiers shared across the test modules."""

NETLIFY_ID = "5f3abafe-68f9-4c1d-835b-9d668b892001"
NETLIFY_URL = "https://tubular-croissant.netlify.app"
CONNECT_SERVER = "https://connect.example.com"

SAMPLE_RECORD_YAML = f"""\
- source: project
  netlify:
    - id: "{NETLIFY_ID}"
      url: "{NETLIFY_URL}"
"""

TWO_CONNECT_YAML = f"""\
- source: project
  connect:
    - id: "4f2ee8b2-0a36-4b4f-a6c5-8f4b43a3c7a1"
      url: "{CONNECT_SERVER}/content/4f2ee8b2/"
      server: "{CONNECT_SERVER}"
    - id: "9b1c7d55-2e1f-4a0b-8d3c-6e5f4a3b2c1d"
      url: "{CONNECT_SERVER}/content/9b1c7d55/"
      server: "{CONNECT_SERVER}"
"""

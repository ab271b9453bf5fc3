import os

# Settings are instantiated at import time; give them a test environment.
os.environ.setdefault("MW_API_BASE_URL", "http://wiki.test/w/api.php")
os.environ.setdefault("MW_REST_BASE_URL", "http://wiki.test/w/rest.php")
os.environ.setdefault("JWT_MW_TO_MCP_SECRET", "test-secret-mw-to-mcp-must-be-long-enough-32chars")
os.environ.setdefault("JWT_MCP_TO_MW_SECRET", "test-secret-mcp-to-mw-must-be-long-enough-32chars")

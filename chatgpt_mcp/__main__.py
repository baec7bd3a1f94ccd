import sys

from chatgpt_mcp.server import main

sys.exit(main())

# File: main.py
# LLM NOTE: LLM Editor, follow these code style guidelines: (1) No docstrings or extra comments; (2) Retain the file path comment, LLM note, and grouping/separation markers exactly as is; (3) Favor concise single-line statements; (4) Preserve code structure and organization

import logging, traceback, sys
from prompt_workbench.controllers.main_controller import main

# Main Execution
# ------------------------------
if __name__ == "__main__":
	try:
		sys.exit(main())
	except Exception as e:
		logging.getLogger(__name__).error("Fatal Error: %s\n%s", e, traceback.format_exc())
		print(f"A fatal error occurred: {e}", file=sys.stderr)
		sys.exit(2)

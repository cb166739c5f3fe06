"""Exit codes for the sonarqube-scanner CLI.

When the scanner itself fails, its own exit status is returned instead.
"""

EXIT_SUCCESS = 0
EXIT_LAUNCHER_ERROR = 2
EXIT_INVALID_USAGE = 3

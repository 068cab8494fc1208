"""Allow ``python -m community_service``."""

from community_service.main import main

main()

"""Allow ``python -m protoc_gen_pyservice``."""

from protoc_gen_pyservice.plugin import main

main()

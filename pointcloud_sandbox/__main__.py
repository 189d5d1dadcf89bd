"""Allow ``python -m pointcloud_sandbox``."""
from .cli import main

raise SystemExit(main())

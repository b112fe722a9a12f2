from eduspark.cli import main

raise SystemExit(main())

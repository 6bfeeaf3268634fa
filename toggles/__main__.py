from toggles.cli import main

raise SystemExit(main())

from xpikit.cli import main

raise SystemExit(main())

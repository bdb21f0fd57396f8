from mdlinks.cli import main

raise SystemExit(main())

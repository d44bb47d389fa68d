from xamlns.cli import main

raise SystemExit(main())

from topups.main import main

raise SystemExit(main())

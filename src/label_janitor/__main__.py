from label_janitor.cli import main

raise SystemExit(main())

from i18nator.cli import main

raise SystemExit(main())

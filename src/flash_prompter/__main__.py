from flash_prompter.cli import main

raise SystemExit(main())

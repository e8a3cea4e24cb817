from gae_sdk_manager.cli import main

raise SystemExit(main())

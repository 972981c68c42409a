from scraper_agent.main import main

raise SystemExit(main())

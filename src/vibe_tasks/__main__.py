from vibe_tasks.cli.main import main

main()

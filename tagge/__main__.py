from tagge.cli.app import main

main()

from plz.cli.app import main

main()

from taxjar_cli.main import main

main()

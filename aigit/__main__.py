from aigit.cli import main

main()

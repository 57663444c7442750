from brahe.cli import main

main()

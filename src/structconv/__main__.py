from structconv.cli import main

main()

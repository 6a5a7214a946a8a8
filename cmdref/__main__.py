from cmdref.cli import main

main()

from mpris_status.cli import main

main()

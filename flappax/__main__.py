from flappax.cli import main

main()

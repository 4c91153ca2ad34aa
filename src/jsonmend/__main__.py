from jsonmend.cli import main

main()

from keysort.app import main

main()

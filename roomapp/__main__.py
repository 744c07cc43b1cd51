from roomapp.app import main

main()

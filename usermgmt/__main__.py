from usermgmt.app import main

main()

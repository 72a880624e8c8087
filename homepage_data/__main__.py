from homepage_data.update_site import main

main()
